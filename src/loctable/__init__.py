"""LocTable - runtime-switchable localized text tables.

Resolves text by (table, key) for the selected locale, switches locales
asynchronously without ever exposing a partially loaded set, formats
named arguments with Babel, and pushes updates to reactive observers.

Public API:
    LocalizationService - Async locale switching, resolve(), observe()
    LocalizationPolicy - Default/fallback locale, startup tables, rendering
    StaticCatalog - Catalog with an address template
    PathTableLoader - Filesystem payload loader
    JsonTableParser - JSON table wire format
    LocaleId, TextTableId, TextKey - Identifier value types
    format_template - Named-argument formatting

Exceptions:
    LocalizationError - Base exception class
    UnsupportedLocaleError - Locale outside the supported set
    LoadFailureError - Catalog/loader/parser failure
    TableParseError - Unusable payload
    ServiceStateError - Operation invalid in the current lifecycle state

Submodules:
    loctable.runtime - Store, formatter, reactive primitives
    loctable.localization - Collaborators, policy, service
    loctable.diagnostics - Error types and diagnostic records
"""

from .core import LocaleId, TextKey, TextTableId
from .diagnostics import (
    LoadFailureError,
    LocalizationDiagnostic,
    LocalizationError,
    ServiceStateError,
    TableParseError,
    UnsupportedLocaleError,
)
from .enums import ErrorCode, LoadStatus, ServiceState
from .localization import (
    FileLocaleStorage,
    JsonTableParser,
    LocalizationPolicy,
    LocalizationService,
    MemoryLocaleStorage,
    PathTableLoader,
    StaticCatalog,
)
from .runtime import Observable, Subscription, format_template

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("loctable")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "ErrorCode",
    "FileLocaleStorage",
    "JsonTableParser",
    "LoadFailureError",
    "LoadStatus",
    "LocaleId",
    "LocalizationDiagnostic",
    "LocalizationError",
    "LocalizationPolicy",
    "LocalizationService",
    "MemoryLocaleStorage",
    "Observable",
    "PathTableLoader",
    "ServiceState",
    "ServiceStateError",
    "StaticCatalog",
    "Subscription",
    "TableParseError",
    "TextKey",
    "TextTableId",
    "UnsupportedLocaleError",
    "__version__",
    "format_template",
]
