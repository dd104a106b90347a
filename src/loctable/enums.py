"""Enumerations for LocTable type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.
StrEnum members are strings themselves, eliminating boilerplate __str__ methods.

Python 3.13+.
"""

from enum import StrEnum


class ServiceState(StrEnum):
    """Lifecycle state of a LocalizationService.

    StrEnum provides automatic string conversion: str(ServiceState.READY) == "ready"
    """

    UNINITIALIZED = "uninitialized"
    """Constructed, or initialization failed: resolve() returns placeholders"""

    INITIALIZING = "initializing"
    """initialize_async() is loading the startup tables"""

    READY = "ready"
    """A locale set is installed and no switch is in flight"""

    SWITCHING_LOCALE = "switching_locale"
    """set_locale_async() is loading a new locale set"""

    DISPOSED = "disposed"
    """dispose() was called; the service is inert"""


class LoadStatus(StrEnum):
    """Outcome of loading a single table for a single locale.

    StrEnum provides automatic string conversion: str(LoadStatus.SUCCESS) == "success"
    """

    SUCCESS = "success"
    """Table fetched and parsed"""

    CACHED = "cached"
    """Table served from the TableCache or the installed set"""

    NOT_FOUND = "not_found"
    """Loader reported the address does not exist"""

    ERROR = "error"
    """Catalog, loader, or parser failure"""


class ErrorCode(StrEnum):
    """Category of a diagnostic published on LocalizationService.errors.

    StrEnum provides automatic string conversion: str(ErrorCode.LOAD_FAILED) == "load_failed"
    """

    UNSUPPORTED_LOCALE = "unsupported_locale"
    """Requested or saved locale is not in the supported set"""

    LOAD_FAILED = "load_failed"
    """Catalog or loader failed to produce bytes for a table"""

    PARSE_FAILED = "parse_failed"
    """Payload bytes did not contain a usable table"""

    STORAGE_FAILED = "storage_failed"
    """Persisted-locale storage could not be read or written"""

    UNKNOWN = "unknown"
    """Anything else raised on the orchestration path"""


__all__ = [
    "ErrorCode",
    "LoadStatus",
    "ServiceState",
]
