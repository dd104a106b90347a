"""Named-argument template formatting.

Substitutes ``{name}`` placeholders in a template using a key->value
mapping. Fail-soft: a placeholder whose name is absent from ``args`` is
left verbatim so missing arguments stay visible instead of raising.

Values are rendered for the active locale with Babel:
    int/float/Decimal  -> babel.numbers.format_decimal
    datetime           -> babel.dates.format_datetime (medium)
    date               -> babel.dates.format_date (medium)
    time               -> babel.dates.format_time (medium)
    bool               -> "True"/"False"
    None               -> ""
    everything else    -> str(value)

If no locale is given, or Babel does not know it, values fall back to
str(value).

Thread Safety:
    Pure functions; the only shared state is the lru_cache behind
    get_babel_locale. Safe for concurrent use.

Python 3.13+.
"""

from __future__ import annotations

import datetime as dt
import logging
import re
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING

from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_decimal

from loctable.locale_utils import find_babel_locale

if TYPE_CHECKING:
    from babel import Locale

    from loctable.core.identifiers import LocaleId

__all__ = ["format_template", "format_value"]

logger = logging.getLogger(__name__)

# From each '{' to the next '}'. A run whose name matches no argument (blank,
# or holding another '{' as in "{{name}") is kept verbatim.
_PLACEHOLDER_PATTERN: re.Pattern[str] = re.compile(r"\{([^}]*)\}")


def _resolve_babel_locale(locale: LocaleId | str | None) -> Locale | None:
    if locale is None:
        return None
    return find_babel_locale(str(locale))


def format_value(value: object, babel_locale: Locale | None = None) -> str:
    """Render one argument value as text.

    Args:
        value: Argument value
        babel_locale: Babel locale for numbers and dates (optional)

    Returns:
        Text for the value
    """
    match value:
        case None:
            return ""
        case str():
            return value
        case bool():
            return str(value)
        case int() | float() | Decimal() if babel_locale is not None:
            return format_decimal(value, locale=babel_locale)
        case dt.datetime() if babel_locale is not None:
            return format_datetime(value, format="medium", locale=babel_locale)
        case dt.date() if babel_locale is not None:
            return format_date(value, format="medium", locale=babel_locale)
        case dt.time() if babel_locale is not None:
            return format_time(value, format="medium", locale=babel_locale)
        case _:
            return str(value)


def format_template(
    template: str,
    args: Mapping[str, object] | None = None,
    locale: LocaleId | str | None = None,
) -> str:
    """Substitute named placeholders in a template.

    Args:
        template: Template text, e.g. "Hello, {name}!"
        args: Named argument values (optional)
        locale: Locale for value rendering (optional)

    Returns:
        Formatted text. The template itself is returned when args is
        empty or the template has no '{'.

    Example:
        >>> format_template("Hello, {name}!", {"name": "Alice"})
        'Hello, Alice!'
        >>> format_template("Hello, {name}!", {})
        'Hello, {name}!'
        >>> format_template("{count} items", {"count": 1234}, "en-US")
        '1,234 items'
    """
    if not args or "{" not in template:
        return template

    babel_locale: Locale | None = None
    locale_resolved = False

    def substitute(match: re.Match[str]) -> str:
        nonlocal babel_locale, locale_resolved
        name = match.group(1).strip()
        if not name or name not in args:
            return match.group(0)
        if not locale_resolved:
            babel_locale = _resolve_babel_locale(locale)
            locale_resolved = True
        try:
            return format_value(args[name], babel_locale)
        except (ValueError, TypeError, ArithmeticError) as e:
            logger.warning("Failed to format argument '%s': %s", name, e)
            return str(args[name])

    return _PLACEHOLDER_PATTERN.sub(substitute, template)
