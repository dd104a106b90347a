"""Localization exception hierarchy with structured diagnostics.

All exceptions may carry a LocalizationDiagnostic so the orchestration
boundary can publish the same information it raises.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .codes import LocalizationDiagnostic

if TYPE_CHECKING:
    from loctable.core.identifiers import LocaleId, TextTableId


class LocalizationError(Exception):
    """Base exception for all localization errors.

    Attributes:
        diagnostic: Structured diagnostic information (optional)
    """

    def __init__(self, message: str | LocalizationDiagnostic) -> None:
        """Initialize LocalizationError.

        Args:
            message: Error message string OR LocalizationDiagnostic object
        """
        if isinstance(message, LocalizationDiagnostic):
            self.diagnostic: LocalizationDiagnostic | None = message
            super().__init__(message.message)
        else:
            self.diagnostic = None
            super().__init__(message)


class UnsupportedLocaleError(LocalizationError):
    """Requested locale is not in the catalog's supported set.

    Raised by LocalizationPolicy.validate_locale before any load begins.

    Attributes:
        locale: The rejected locale
        supported: The supported locales at the time of the check
    """

    def __init__(
        self,
        message: str | LocalizationDiagnostic,
        *,
        locale: LocaleId,
        supported: tuple[LocaleId, ...] = (),
    ) -> None:
        """Initialize UnsupportedLocaleError.

        Args:
            message: Error message string OR LocalizationDiagnostic object
            locale: The rejected locale
            supported: The supported locales
        """
        super().__init__(message)
        self.locale = locale
        self.supported = supported


class LoadFailureError(LocalizationError):
    """A required table could not be produced for a locale.

    Covers catalog, loader, and parser failures. A switch or
    initialization that hits one aborts without touching the store.

    Attributes:
        locale: Locale being loaded
        table: Table being loaded
        address: Catalog address (empty if the catalog itself failed)
    """

    def __init__(
        self,
        message: str | LocalizationDiagnostic,
        *,
        locale: LocaleId | None = None,
        table: TextTableId | None = None,
        address: str = "",
    ) -> None:
        """Initialize LoadFailureError.

        Args:
            message: Error message string OR LocalizationDiagnostic object
            locale: Locale being loaded
            table: Table being loaded
            address: Catalog address of the payload
        """
        super().__init__(message)
        self.locale = locale
        self.table = table
        self.address = address


class TableParseError(LoadFailureError):
    """Payload bytes do not encode a usable table.

    Examples:
    - Not UTF-8, not JSON, or root is not an object
    - Missing, non-object, or empty ``entries``
    - ``locale``/``table`` fields disagree with the request
    """


class ServiceStateError(LocalizationError):
    """Operation is not valid in the service's current lifecycle state.

    Example:
        set_locale_async() before initialize_async() succeeded, or after
        dispose().
    """
