"""Runtime package: store, formatter, and reactive primitives.

Depends only on the core identifiers; the localization layer builds on it.

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from .formatter import format_template, format_value
from .reactive import (
    CompositeSubscription,
    Observable,
    ReactiveProperty,
    ReadOnlyReactiveProperty,
    Subject,
    Subscription,
    combine_latest,
)
from .store import LoadedLocaleSet, LocalizationStore, TableCache, TextTable

__all__ = [
    # Store
    "LocalizationStore",
    "LoadedLocaleSet",
    "TableCache",
    "TextTable",
    # Formatting
    "format_template",
    "format_value",
    # Reactive
    "CompositeSubscription",
    "Observable",
    "ReactiveProperty",
    "ReadOnlyReactiveProperty",
    "Subject",
    "Subscription",
    "combine_latest",
]
