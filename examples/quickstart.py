"""Quickstart example for loctable.

Writes a few JSON tables to a temporary directory, initializes a
LocalizationService over them, and resolves text with and without
arguments.

Note: Examples print diagnostics from service.errors for visibility. In
production, forward them to your logging or telemetry instead.
"""

import asyncio
import json
import tempfile
from pathlib import Path

from loctable import (
    LocalizationService,
    PathTableLoader,
    StaticCatalog,
)

TABLES = {
    "loc_en_ui.json": {
        "locale": "en-US",
        "table": "UI",
        "entries": {
            "Menu.Play": "Play",
            "Menu.Quit": "Quit",
            "Greeting": "Hello, {name}!",
            "Inventory": "{count} items",
        },
    },
    "loc_ru_ui.json": {
        "locale": "ru-RU",
        "table": "UI",
        "entries": {
            "Menu.Play": "Играть",
            "Greeting": "Привет, {name}!",
            "Inventory": "Предметов: {count}",
        },
    },
}


async def main() -> None:
    with tempfile.TemporaryDirectory() as tmpdir:
        root = Path(tmpdir)
        for name, body in TABLES.items():
            (root / name).write_text(json.dumps(body, ensure_ascii=False), encoding="utf-8")

        catalog = StaticCatalog(locales=("en-US", "ru-RU"), tables=("UI",))
        async with LocalizationService(catalog, PathTableLoader(root)) as service:
            service.errors.subscribe(lambda d: print(f"  ! {d.format_error()}"))

            # Example 1: Initialize and resolve
            print("=" * 50)
            print("Example 1: Resolve")
            print("=" * 50)
            await service.initialize_async()
            print(service.resolve("UI", "Menu.Play"))
            # Output: Play

            # Example 2: Named arguments (numbers use Babel)
            print("\n" + "=" * 50)
            print("Example 2: Arguments")
            print("=" * 50)
            print(service.resolve("UI", "Greeting", {"name": "Alice"}))
            # Output: Hello, Alice!
            print(service.resolve("UI", "Inventory", {"count": 12500}))
            # Output: 12,500 items

            # Example 3: Missing keys never raise
            print("\n" + "=" * 50)
            print("Example 3: Missing Text")
            print("=" * 50)
            print(service.resolve("UI", "Menu.Settings"))
            # Output: [UI.Menu.Settings]

            # Example 4: Switch locale; Menu.Quit falls back to English
            print("\n" + "=" * 50)
            print("Example 4: Switch Locale")
            print("=" * 50)
            await service.set_locale_async("ru-RU")
            print(service.resolve("UI", "Inventory", {"count": 12500}))
            # Output: Предметов: 12 500
            print(service.resolve("UI", "Menu.Quit"))
            # Output: Quit

            summary = service.get_load_summary()
            print(f"\nLast load pass: {summary!r}")


if __name__ == "__main__":
    asyncio.run(main())
