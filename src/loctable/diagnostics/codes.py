"""Diagnostic records published on the service error stream.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from loctable.enums import ErrorCode

if TYPE_CHECKING:
    from loctable.core.identifiers import LocaleId, TextKey, TextTableId

__all__ = ["LocalizationDiagnostic"]


@dataclass(frozen=True, slots=True)
class LocalizationDiagnostic:
    """Structured description of a load, validation, or storage failure.

    Published on ``LocalizationService.errors``. Expected cancellations
    (superseded switches, caller cancellation) never produce one.

    Attributes:
        code: Failure category
        message: Human-readable description
        locale: Locale involved (if any)
        table: Table involved (if any)
        key: Key involved (if any)
        error: Underlying exception (if any)

    Example:
        >>> def report(diagnostic: LocalizationDiagnostic) -> None:
        ...     print(diagnostic.format_error())
        >>> subscription = service.errors.subscribe(report)
    """

    code: ErrorCode
    message: str
    locale: LocaleId | None = None
    table: TextTableId | None = None
    key: TextKey | None = None
    error: BaseException | None = None

    def format_error(self) -> str:
        """Format as a single log-friendly line.

        Returns:
            ``"<code>: <message> (locale=..., table=...)"`` with only the
            context fields that are set.
        """
        context = [
            f"{name}={value}"
            for name, value in (("locale", self.locale), ("table", self.table), ("key", self.key))
            if value is not None
        ]
        if self.error is not None:
            context.append(f"cause={type(self.error).__name__}: {self.error}")
        suffix = f" ({', '.join(context)})" if context else ""
        return f"{self.code}: {self.message}{suffix}"
