"""Tests for LocalizationPolicy."""

from __future__ import annotations

from unittest.mock import patch

import pytest

from loctable.core import LocaleId, TextTableId
from loctable.diagnostics import UnsupportedLocaleError
from loctable.localization import LocalizationPolicy, StaticCatalog

EN = LocaleId("en-US")
RU = LocaleId("ru-RU")
DE = LocaleId("de-DE")


class TestPolicyDefaults:
    """Construction and validation."""

    def test_defaults(self) -> None:
        """Default policy starts and falls back to en-US."""
        policy = LocalizationPolicy()
        assert policy.default_locale == EN
        assert policy.fallback_locale == EN
        assert policy.startup_tables == ()
        assert policy.use_missing_key_placeholders is True
        assert policy.max_cached_tables == 32

    def test_plain_strings_coerced(self) -> None:
        """Locale codes and table names may be given as text."""
        policy = LocalizationPolicy(
            default_locale="ru_ru",  # type: ignore[arg-type]
            fallback_locale="en-us",  # type: ignore[arg-type]
            startup_tables=("UI", "UI", "Gameplay"),  # type: ignore[arg-type]
        )
        assert policy.default_locale == RU
        assert policy.fallback_locale == EN
        assert policy.startup_tables == (TextTableId("UI"), TextTableId("Gameplay"))

    def test_invalid_cache_size(self) -> None:
        """max_cached_tables must be positive."""
        with pytest.raises(ValueError, match="max_cached_tables must be positive"):
            LocalizationPolicy(max_cached_tables=0)


class TestValidateLocale:
    """Supported-set validation."""

    def test_supported_passes(self) -> None:
        """Supported locale is accepted silently."""
        LocalizationPolicy().validate_locale(RU, (EN, RU))

    def test_unsupported_raises(self) -> None:
        """Unsupported locale raises with context."""
        with pytest.raises(UnsupportedLocaleError, match="'de-DE' is not supported") as exc_info:
            LocalizationPolicy().validate_locale(DE, [EN, RU])
        assert exc_info.value.locale == DE
        assert exc_info.value.supported == (EN, RU)


class TestFallback:
    """Single-level fallback selection."""

    def test_fallback_for_other_locale(self) -> None:
        """Non-fallback locales fall back to the fallback locale."""
        assert LocalizationPolicy().fallback_for(RU) == EN

    def test_fallback_of_fallback_is_none(self) -> None:
        """The fallback locale has no fallback."""
        assert LocalizationPolicy().fallback_for(EN) is None

    def test_custom_fallback(self) -> None:
        """fallback_locale overrides default_locale for fallback."""
        policy = LocalizationPolicy(default_locale=RU, fallback_locale=DE)
        assert policy.fallback_for(RU) == DE
        assert policy.fallback_for(DE) is None


class TestStartupTablesAndPlaceholders:
    """Startup tables and missing-text rendering."""

    def test_catalog_tables_used_when_policy_empty(self) -> None:
        """Empty policy tables defer to the catalog."""
        catalog = StaticCatalog(locales=(EN,), tables=("UI", "Gameplay"))
        assert LocalizationPolicy().resolve_startup_tables(catalog) == (
            TextTableId("UI"),
            TextTableId("Gameplay"),
        )

    def test_policy_tables_override_catalog(self) -> None:
        """Explicit policy tables win."""
        catalog = StaticCatalog(locales=(EN,), tables=("UI", "Gameplay"))
        policy = LocalizationPolicy(startup_tables=(TextTableId("Errors"),))
        assert policy.resolve_startup_tables(catalog) == (TextTableId("Errors"),)

    def test_missing_text_placeholder(self) -> None:
        """Placeholders render as [table.key]."""
        assert LocalizationPolicy().missing_text(TextTableId("UI"), "Nope") == "[UI.Nope]"

    def test_missing_text_suppressed(self) -> None:
        """Disabling placeholders renders an empty string."""
        policy = LocalizationPolicy(use_missing_key_placeholders=False)
        assert policy.missing_text("UI", "Nope") == ""


class TestFromSystem:
    """Choosing the default from the OS locale."""

    def test_exact_match(self) -> None:
        """A supported system locale becomes the default."""
        with patch("loctable.localization.policy.get_system_locale", return_value="ru_RU"):
            policy = LocalizationPolicy.from_system((EN, RU))
        assert policy.default_locale == RU
        assert policy.fallback_locale == EN

    def test_language_match(self) -> None:
        """A system locale matching only by language picks that language."""
        with patch("loctable.localization.policy.get_system_locale", return_value="ru_UA"):
            policy = LocalizationPolicy.from_system((EN, RU))
        assert policy.default_locale == RU

    def test_unsupported_uses_fallback(self) -> None:
        """An unsupported system locale falls back."""
        with patch("loctable.localization.policy.get_system_locale", return_value="ja_JP"):
            policy = LocalizationPolicy.from_system((EN, RU), fallback_locale="ru-RU")
        assert policy.default_locale == RU
        assert policy.fallback_locale == RU

    def test_undetectable_system_locale_uses_fallback(self) -> None:
        """When no system locale is detectable, the fallback is the default."""
        with patch(
            "loctable.localization.policy.get_system_locale",
            side_effect=RuntimeError("Could not determine system locale."),
        ) as detect:
            policy = LocalizationPolicy.from_system((EN, RU), fallback_locale="ru-RU")
        detect.assert_called_once_with(raise_on_failure=True)
        assert policy.default_locale == RU
        assert policy.fallback_locale == RU
