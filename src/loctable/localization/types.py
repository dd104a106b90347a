"""Type aliases for the localization domain.

Provides semantic type aliases used throughout the localization package
and by user code when annotating LocalizationService call sites.

Python 3.13+. Zero external dependencies.
"""

from collections.abc import Mapping

__all__ = [
    "Address",
    "LocaleCode",
    "Template",
    "TextArgs",
]

type Address = str
"""Catalog address of a table payload (e.g., 'loc_en_ui')."""

type LocaleCode = str
"""BCP-47 locale code as plain text (e.g., 'en-US', 'ru-RU')."""

type Template = str
"""Template text with {name} placeholders (e.g., 'Hello, {name}!')."""

type TextArgs = Mapping[str, object]
"""Named arguments substituted into a template."""
