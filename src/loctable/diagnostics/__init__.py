"""Diagnostic system for localization errors.

Provides the exception hierarchy and the immutable diagnostic records
published on the service error stream.

Python 3.13+. Zero external dependencies.
"""

from .codes import LocalizationDiagnostic
from .errors import (
    LoadFailureError,
    LocalizationError,
    ServiceStateError,
    TableParseError,
    UnsupportedLocaleError,
)

__all__ = [
    "LoadFailureError",
    "LocalizationDiagnostic",
    "LocalizationError",
    "ServiceStateError",
    "TableParseError",
    "UnsupportedLocaleError",
]
