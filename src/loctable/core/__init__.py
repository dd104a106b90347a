"""Core value types shared across runtime and localization layers.

This package provides the identifier types that both the runtime layer
(store, formatter) and localization layer (catalog, service) depend on.
By isolating them here, we maintain a clean dependency graph:

    core <- runtime <- localization

Exports:
    LocaleId: Normalized locale identifier
    TextTableId: Table identifier
    TextKey: Key identifier within a table

Python 3.13+.
"""

from .identifiers import LocaleId, TextKey, TextTableId

__all__ = ["LocaleId", "TextKey", "TextTableId"]
