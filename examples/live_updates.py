"""Live text updates with observe().

Demonstrates:
1. Observers that follow locale switches
2. Observable arguments (e.g., a player name that changes)
3. Rapid switching: only the last request installs
4. Reporting fallback lookups

Uses an in-memory loader with a small artificial delay so switches
overlap.
"""

from __future__ import annotations

import asyncio
import json

from loctable import LocaleId, LocalizationService, StaticCatalog
from loctable.localization import FallbackInfo
from loctable.runtime import ReactiveProperty

PAYLOADS = {
    "loc_en_hud": {"Score": "Score: {points}", "Welcome": "Welcome, {player}!", "Pause": "Paused"},
    "loc_ru_hud": {"Score": "Очки: {points}", "Welcome": "Добро пожаловать, {player}!"},
    "loc_de_hud": {"Score": "Punkte: {points}", "Welcome": "Willkommen, {player}!"},
}


class SlowMemoryLoader:
    """Serves JSON tables from a dict after a short delay."""

    def __init__(self, delay: float = 0.05) -> None:
        self.delay = delay

    async def load_bytes(self, address: str) -> bytes:
        await asyncio.sleep(self.delay)
        try:
            entries = PAYLOADS[address]
        except KeyError:
            raise FileNotFoundError(address) from None
        return json.dumps({"entries": entries}, ensure_ascii=False).encode("utf-8")


def report_fallback(info: FallbackInfo) -> None:
    print(f"  (fallback: {info.table}.{info.key} from {info.resolved_locale})")


async def main() -> None:
    catalog = StaticCatalog(locales=("en-US", "ru-RU", "de-DE"), tables=("HUD",))
    service = LocalizationService(catalog, SlowMemoryLoader(), on_fallback=report_fallback)
    await service.initialize_async()

    print("Example 1: Observer follows switches")
    score = service.observe("HUD", "Score", {"points": 1500})
    subscription = score.subscribe(lambda text: print(f"  score label -> {text}"))
    await service.set_locale_async("ru-RU")

    print("\nExample 2: Observable arguments")
    player: ReactiveProperty[dict[str, object] | None] = ReactiveProperty({"player": "Anna"})
    welcome = service.observe("HUD", "Welcome", player).subscribe(
        lambda text: print(f"  welcome label -> {text}")
    )
    player.set_value({"player": "Boris"})

    print("\nExample 3: Rapid switching")
    results = await asyncio.gather(
        service.set_locale_async("de-DE"),
        service.set_locale_async("en-US"),
        service.set_locale_async(LocaleId("de-DE")),
    )
    print(f"  results: {results}, active: {service.current_locale.value}")

    print("\nExample 4: Fallback lookups")
    print(f"  {service.resolve('HUD', 'Pause')}")

    subscription.dispose()
    welcome.dispose()
    await service.aclose()


if __name__ == "__main__":
    asyncio.run(main())
