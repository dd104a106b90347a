"""Identifier value types: LocaleId, TextTableId, TextKey.

All three are immutable, slotted, and compare/hash by their normalized
string (ordinal comparison). They are cheap to construct; callers create
them on demand and never dispose them.

Normalization:
    LocaleId     - trimmed; '_' accepted as separator and converted to '-';
                   language subtag lowercased; a two-letter region subtag
                   uppercased; any other remainder kept as given
                   ("EN_us" -> "en-US", "zh-Hant" -> "zh-Hant", "RU" -> "ru")
    TextTableId  - trimmed
    TextKey      - trimmed

Thread Safety:
    Instances are frozen. Safe to share across threads.

Python 3.13+.
"""

from __future__ import annotations

from dataclasses import dataclass

from loctable.locale_utils import normalize_locale

__all__ = [
    "LocaleId",
    "TextKey",
    "TextTableId",
]


def _require_text(value: object, what: str) -> str:
    """Return value stripped, rejecting non-strings and blank strings.

    Raises:
        TypeError: If value is not a str
        ValueError: If value is empty or whitespace-only
    """
    if not isinstance(value, str):
        msg = f"{what} must be a str, got {type(value).__name__}"
        raise TypeError(msg)
    stripped = value.strip()
    if not stripped:
        msg = f"{what} must be non-empty"
        raise ValueError(msg)
    return stripped


def _normalize_locale_code(code: str) -> str:
    code = code.replace("_", "-")
    language, sep, rest = code.partition("-")
    language = language.strip()
    rest = rest.strip()

    if not sep:
        return code.lower()
    if not language:
        return code
    if not rest:
        return language.lower()
    # Most common format: xx-YY
    if len(rest) == 2:
        return f"{language.lower()}-{rest.upper()}"
    return f"{language.lower()}-{rest}"


@dataclass(frozen=True, slots=True)
class LocaleId:
    """Immutable locale identifier (language + optional region).

    Example:
        >>> LocaleId("en-us")
        LocaleId(code='en-US')
        >>> LocaleId("ru_RU") == LocaleId("ru-RU")
        True
        >>> LocaleId("ja-JP").language_only()
        LocaleId(code='ja')

    Attributes:
        code: Normalized BCP-47 style code
    """

    code: str

    def __post_init__(self) -> None:
        """Normalize the code.

        Raises:
            TypeError: If code is not a str
            ValueError: If code is empty or whitespace-only
        """
        stripped = _require_text(self.code, "Locale code")
        object.__setattr__(self, "code", _normalize_locale_code(stripped))

    def __str__(self) -> str:
        return self.code

    @property
    def language(self) -> str:
        """Language subtag (e.g. 'en' for 'en-US')."""
        return self.code.partition("-")[0]

    @property
    def babel_code(self) -> str:
        """POSIX form accepted by Babel (e.g. 'en_US')."""
        return normalize_locale(self.code)

    def language_only(self) -> LocaleId:
        """Return the language-only locale, or self if there is no region.

        Returns:
            LocaleId holding only the language subtag
        """
        dash_index = self.code.find("-")
        if dash_index <= 0:
            return self
        return LocaleId(self.code[:dash_index])


@dataclass(frozen=True, slots=True)
class TextTableId:
    """Logical table identifier (group of localized strings).

    Examples: "UI", "Gameplay", "Errors".

    Attributes:
        name: Trimmed table name
    """

    name: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", _require_text(self.name, "Table name"))

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True, slots=True)
class TextKey:
    """Entry identifier within a table.

    Recommended format: "Screen.Button.Play".

    Attributes:
        value: Trimmed key
    """

    value: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _require_text(self.value, "Key"))

    def __str__(self) -> str:
        return self.value
