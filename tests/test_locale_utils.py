"""Tests for locale_utils.py.

Covers normalize_locale, get_babel_locale, find_babel_locale, and
get_system_locale.

Python 3.13+.
"""

import os
from unittest.mock import patch

import pytest
from babel import Locale
from babel.core import UnknownLocaleError

from loctable.locale_utils import (
    find_babel_locale,
    get_babel_locale,
    get_system_locale,
    normalize_locale,
)


class TestNormalizeLocale:
    """Test normalize_locale function."""

    def test_bcp47_to_posix(self) -> None:
        """BCP-47 locale code converted to POSIX format."""
        assert normalize_locale("en-US") == "en_US"

    def test_simple_locale(self) -> None:
        """Simple locale without region unchanged."""
        assert normalize_locale("en") == "en"

    def test_multiple_hyphens(self) -> None:
        """Multiple hyphens all converted to underscores."""
        assert normalize_locale("zh-Hans-CN") == "zh_Hans_CN"


class TestGetBabelLocale:
    """Test get_babel_locale function with caching."""

    def test_bcp47_format(self) -> None:
        """BCP-47 format locale parsed correctly."""
        locale = get_babel_locale("en-US")
        assert isinstance(locale, Locale)
        assert locale.language == "en"
        assert locale.territory == "US"

    def test_posix_format(self) -> None:
        """POSIX format locale parsed correctly."""
        locale = get_babel_locale("ru_RU")
        assert locale.language == "ru"
        assert locale.territory == "RU"

    def test_caching(self) -> None:
        """Repeated calls return cached Locale object."""
        assert get_babel_locale("pt-BR") is get_babel_locale("pt-BR")

    def test_unknown_locale_raises(self) -> None:
        """Unknown locale raises Babel's UnknownLocaleError."""
        with pytest.raises((UnknownLocaleError, ValueError)):
            get_babel_locale("xx-XX")


class TestFindBabelLocale:
    """Test find_babel_locale graceful lookup."""

    def test_exact_match(self) -> None:
        """Known locale is returned as is."""
        locale = find_babel_locale("de-DE")
        assert locale is not None
        assert locale.territory == "DE"

    def test_language_fallback(self) -> None:
        """Unknown region falls back to the language subtag."""
        locale = find_babel_locale("en-ZZ")
        assert locale is not None
        assert locale.language == "en"

    def test_unknown_returns_none(self) -> None:
        """Locale Babel does not know at all returns None."""
        assert find_babel_locale("xx-XX") is None


class TestGetSystemLocale:
    """Test get_system_locale function with environment and OS detection."""

    def test_getlocale_success(self) -> None:
        """OS-level locale.getlocale() returns valid locale."""
        with patch("locale.getlocale", return_value=("en_US", "UTF-8")):
            assert get_system_locale() == "en_US"

    def test_getlocale_with_encoding(self) -> None:
        """getlocale() result with encoding suffix stripped."""
        with patch("locale.getlocale", return_value=("de_DE.UTF-8", "UTF-8")):
            assert get_system_locale() == "de_DE"

    def test_c_locale_falls_back_to_env(self) -> None:
        """getlocale() returning 'C' triggers environment fallback."""
        with (
            patch("locale.getlocale", return_value=("C", None)),
            patch.dict(os.environ, {"LC_ALL": "", "LC_MESSAGES": "", "LANG": "ru_RU.UTF-8"}),
        ):
            assert get_system_locale() == "ru_RU"

    def test_default_when_undetectable(self) -> None:
        """Nothing detectable returns en_US."""
        with (
            patch("locale.getlocale", return_value=(None, None)),
            patch.dict(os.environ, {"LC_ALL": "", "LC_MESSAGES": "", "LANG": ""}),
        ):
            assert get_system_locale() == "en_US"

    def test_raise_on_failure(self) -> None:
        """raise_on_failure=True raises RuntimeError when undetectable."""
        with (
            patch("locale.getlocale", return_value=(None, None)),
            patch.dict(os.environ, {"LC_ALL": "", "LC_MESSAGES": "", "LANG": ""}),
            pytest.raises(RuntimeError, match="Could not determine system locale"),
        ):
            get_system_locale(raise_on_failure=True)
