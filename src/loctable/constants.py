"""Shared constants for LocTable.

This module provides centralized configuration constants used across
the runtime and localization packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Locale defaults: Locale used when nothing else is configured
- Cache limits: Memory bounds for caching subsystems
- Input limits: DoS prevention via size constraints
- Fallback strings: Text shown in place of missing content

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Locale defaults
    "DEFAULT_LOCALE_CODE",
    # Cache limits
    "DEFAULT_MAX_CACHED_TABLES",
    "MAX_LOCALE_CACHE_SIZE",
    "MAX_REPORTED_MISSING_KEYS",
    # Input limits
    "MAX_PAYLOAD_SIZE",
    # Catalog conventions
    "DEFAULT_ADDRESS_TEMPLATE",
    # Fallback strings
    "FALLBACK_MISSING_TEXT",
    "FALLBACK_SUPPRESSED_TEXT",
]

# ============================================================================
# LOCALE DEFAULTS
# ============================================================================

# Locale used by LocalizationPolicy when no default is configured.
DEFAULT_LOCALE_CODE: str = "en-US"

# ============================================================================
# CACHE LIMITS
# ============================================================================

# Maximum parsed tables kept in the TableCache (across all locales).
# 32 covers a handful of locales with their startup tables plus a few
# preloaded screens.
DEFAULT_MAX_CACHED_TABLES: int = 32

# Maximum cached Babel Locale instances.
# Prevents unbounded memory growth in multi-locale applications.
MAX_LOCALE_CACHE_SIZE: int = 128

# Maximum distinct (locale, table, key) triples remembered for
# missing-key log deduplication. The set is reset when full.
MAX_REPORTED_MISSING_KEYS: int = 4096

# ============================================================================
# INPUT LIMITS
# ============================================================================

# Maximum table payload size in bytes (10 MB).
# Prevents unbounded memory allocation from oversized or hostile payloads.
MAX_PAYLOAD_SIZE: int = 10 * 1024 * 1024

# ============================================================================
# CATALOG CONVENTIONS
# ============================================================================

# Address template used by StaticCatalog.
# Placeholders: {locale} (full code), {language} (language subtag, lowercase),
# {table} (table name, lowercase). Default yields e.g. "loc_en_ui".
DEFAULT_ADDRESS_TEMPLATE: str = "loc_{language}_{table}"

# ============================================================================
# FALLBACK STRINGS
# ============================================================================

# Diagnostic placeholder returned when (table, key) cannot be resolved.
# Format string - use .format(table=..., key=...).
FALLBACK_MISSING_TEXT: str = "[{table}.{key}]"  # e.g., [UI.Menu.Play]

# Returned instead of the placeholder when the policy disables placeholders.
FALLBACK_SUPPRESSED_TEXT: str = ""
