"""Localization policy: locale validation, fallback, startup tables.

Provides a single frozen dataclass holding the decisions the service
delegates: which locale to start in, which locale backs up a missing key,
which tables every locale must have, how missing text renders, and how
many parsed tables to keep cached.

Python 3.13+.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from loctable.constants import (
    DEFAULT_LOCALE_CODE,
    DEFAULT_MAX_CACHED_TABLES,
    FALLBACK_MISSING_TEXT,
    FALLBACK_SUPPRESSED_TEXT,
)
from loctable.core.identifiers import LocaleId, TextTableId
from loctable.diagnostics import UnsupportedLocaleError
from loctable.locale_utils import get_system_locale

if TYPE_CHECKING:
    from loctable.localization.loading import TableCatalog

__all__ = ["LocalizationPolicy"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LocalizationPolicy:
    """Immutable policy consulted by LocalizationService.

    All fields have sensible defaults; ``LocalizationPolicy()`` starts in
    en-US, falls back to en-US, takes startup tables from the catalog, and
    renders missing text as ``[table.key]``.

    Attributes:
        default_locale: Locale used when nothing usable is persisted
        fallback_locale: Locale consulted for keys missing from the active
            locale (default: default_locale). Single level only.
        startup_tables: Tables required for every locale. Empty means
            "use the catalog's startup tables".
        use_missing_key_placeholders: Render missing text as ``[table.key]``
            (True) or as an empty string (False)
        max_cached_tables: Capacity of the parsed-table cache

    Example:
        >>> policy = LocalizationPolicy(default_locale="ru-RU", fallback_locale="en-US")
        >>> policy.fallback_for(LocaleId("ru-RU"))
        LocaleId(code='en-US')
        >>> policy.fallback_for(LocaleId("en-US")) is None
        True
    """

    default_locale: LocaleId = LocaleId(DEFAULT_LOCALE_CODE)
    fallback_locale: LocaleId | None = None
    startup_tables: tuple[TextTableId, ...] = ()
    use_missing_key_placeholders: bool = True
    max_cached_tables: int = DEFAULT_MAX_CACHED_TABLES

    def __post_init__(self) -> None:
        """Coerce identifiers and validate limits.

        Raises:
            ValueError: If max_cached_tables is not positive
        """
        if self.max_cached_tables <= 0:
            msg = f"max_cached_tables must be positive, got {self.max_cached_tables}"
            raise ValueError(msg)
        default_locale = _as_locale(self.default_locale)
        object.__setattr__(self, "default_locale", default_locale)
        object.__setattr__(
            self,
            "fallback_locale",
            _as_locale(self.fallback_locale) if self.fallback_locale is not None else default_locale,
        )
        object.__setattr__(
            self,
            "startup_tables",
            tuple(
                dict.fromkeys(
                    t if isinstance(t, TextTableId) else TextTableId(t)
                    for t in self.startup_tables
                )
            ),
        )

    @classmethod
    def from_system(
        cls,
        supported: Iterable[LocaleId],
        *,
        fallback_locale: LocaleId | str | None = None,
        **kwargs: object,
    ) -> LocalizationPolicy:
        """Build a policy whose default is the OS/environment locale.

        The system locale is matched exactly first, then by language. If
        neither matches, or no system locale can be detected, the fallback
        locale (or en-US) is the default.

        Args:
            supported: Locales the catalog offers
            fallback_locale: Fallback and last-resort default (optional)
            **kwargs: Remaining LocalizationPolicy fields

        Returns:
            LocalizationPolicy
        """
        supported = tuple(supported)
        last_resort = (
            _as_locale(fallback_locale)
            if fallback_locale is not None
            else LocaleId(DEFAULT_LOCALE_CODE)
        )
        try:
            system = LocaleId(get_system_locale(raise_on_failure=True))
        except RuntimeError as e:
            logger.info("%s Using '%s'", e, last_resort)
            return cls(default_locale=last_resort, fallback_locale=last_resort, **kwargs)  # type: ignore[arg-type]
        chosen = next((loc for loc in supported if loc == system), None)
        if chosen is None:
            chosen = next((loc for loc in supported if loc.language == system.language), None)
        if chosen is None:
            logger.info("System locale '%s' not supported; using '%s'", system, last_resort)
            chosen = last_resort
        return cls(default_locale=chosen, fallback_locale=last_resort, **kwargs)  # type: ignore[arg-type]

    def validate_locale(self, locale: LocaleId, supported: Iterable[LocaleId]) -> None:
        """Reject locales outside the supported set.

        Raises:
            UnsupportedLocaleError: If locale is not in supported
        """
        supported = tuple(supported)
        if locale not in supported:
            msg = (
                f"Locale '{locale}' is not supported. "
                f"Supported: {', '.join(str(s) for s in supported) or '(none)'}"
            )
            raise UnsupportedLocaleError(msg, locale=locale, supported=supported)

    def fallback_for(self, locale: LocaleId) -> LocaleId | None:
        """Fallback locale for locale, or None if it is the fallback itself."""
        if self.fallback_locale is None or self.fallback_locale == locale:
            return None
        return self.fallback_locale

    def resolve_startup_tables(self, catalog: TableCatalog) -> tuple[TextTableId, ...]:
        """Tables required for every locale: explicit ones, else the catalog's."""
        if self.startup_tables:
            return self.startup_tables
        return tuple(dict.fromkeys(catalog.startup_tables()))

    def missing_text(self, table: TextTableId | str, key: object) -> str:
        """Text rendered for a key that cannot be resolved."""
        if not self.use_missing_key_placeholders:
            return FALLBACK_SUPPRESSED_TEXT
        return FALLBACK_MISSING_TEXT.format(table=table, key=key)


def _as_locale(value: LocaleId | str) -> LocaleId:
    return value if isinstance(value, LocaleId) else LocaleId(value)
