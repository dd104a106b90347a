"""Localization package: collaborators, policy, and the service.

Submodules:
    types      - PEP 695 type aliases (Address, LocaleCode, Template, TextArgs)
    loading    - TableCatalog/TableLoader/LocaleStorage protocols, StaticCatalog,
                 PathTableLoader, Memory/FileLocaleStorage, FallbackInfo,
                 TableLoadResult, LoadSummary
    parser     - TableParser protocol, JsonTableParser
    policy     - LocalizationPolicy
    service    - LocalizationService (async orchestration)

Python 3.13+.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability

from loctable.enums import LoadStatus
from loctable.localization.loading import (
    FallbackInfo,
    FileLocaleStorage,
    LoadSummary,
    LocaleStorage,
    MemoryLocaleStorage,
    PathTableLoader,
    StaticCatalog,
    TableCatalog,
    TableLoader,
    TableLoadResult,
)
from loctable.localization.parser import JsonTableParser, TableParser
from loctable.localization.policy import LocalizationPolicy
from loctable.localization.service import LocalizationService
from loctable.localization.types import Address, LocaleCode, Template, TextArgs

__all__ = [
    # Main service
    "LocalizationService",
    "LocalizationPolicy",
    # Collaborator protocols and implementations
    "TableCatalog",
    "StaticCatalog",
    "TableLoader",
    "PathTableLoader",
    "TableParser",
    "JsonTableParser",
    "LocaleStorage",
    "MemoryLocaleStorage",
    "FileLocaleStorage",
    # Load tracking
    "LoadStatus",
    "LoadSummary",
    "TableLoadResult",
    # Fallback observability
    "FallbackInfo",
    # Type aliases for user code type annotations
    "Address",
    "LocaleCode",
    "Template",
    "TextArgs",
]
