"""Table loading infrastructure for LocalizationService.

Provides the collaborator protocols the service depends on, default
implementations of each, and result/summary data structures for tracking
load attempts.

Components:
    TableCatalog - Protocol: supported locales, startup tables, addresses
    TableLoader - Protocol: async raw byte fetch by address
    LocaleStorage - Protocol: async load/save of the persisted locale
    StaticCatalog - In-memory catalog with an address template
    PathTableLoader - Disk-based loader with path-traversal prevention
    MemoryLocaleStorage - Process-local locale storage
    FileLocaleStorage - Locale storage backed by a small text file
    FallbackInfo - Immutable record of a locale fallback event
    TableLoadResult - Immutable result of a single table load attempt
    LoadSummary - Immutable aggregate of one load pass

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from loctable.constants import DEFAULT_ADDRESS_TEMPLATE, MAX_PAYLOAD_SIZE
from loctable.core.identifiers import LocaleId, TextKey, TextTableId
from loctable.enums import LoadStatus
from loctable.localization.types import Address

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Protocols
    "TableCatalog",
    "TableLoader",
    "LocaleStorage",
    # Default implementations
    "StaticCatalog",
    "PathTableLoader",
    "MemoryLocaleStorage",
    "FileLocaleStorage",
    # Fallback observability
    "FallbackInfo",
    # Load result types
    "TableLoadResult",
    "LoadSummary",
]

logger = logging.getLogger(__name__)


class TableCatalog(Protocol):
    """Protocol describing which locales and tables exist and where.

    This is a Protocol (structural typing) rather than ABC to allow
    maximum flexibility for users implementing custom catalogs.

    Example:
        >>> class RemoteCatalog:
        ...     def supported_locales(self) -> tuple[LocaleId, ...]:
        ...         return (LocaleId("en-US"), LocaleId("ru-RU"))
        ...     def startup_tables(self) -> tuple[TextTableId, ...]:
        ...         return (TextTableId("UI"),)
        ...     def address_for(self, locale: LocaleId, table: TextTableId) -> str:
        ...         return f"cdn://{locale}/{table}.json"
    """

    def supported_locales(self) -> tuple[LocaleId, ...]:
        """Locales that can be selected."""
        ...

    def startup_tables(self) -> tuple[TextTableId, ...]:
        """Tables loaded for every locale at initialization and on switch."""
        ...

    def address_for(self, locale: LocaleId, table: TextTableId) -> Address:
        """Address the loader understands for (locale, table).

        Raises:
            KeyError: If the catalog has no address for the pair
        """
        ...


class TableLoader(Protocol):
    """Protocol for fetching raw table payloads by address.

    Implementations may perform I/O on worker threads; the service awaits
    the coroutine on its own event loop.
    """

    async def load_bytes(self, address: Address) -> bytes:
        """Fetch the payload at address.

        Raises:
            FileNotFoundError: If nothing exists at address
            OSError: If the payload cannot be read
        """
        ...


class LocaleStorage(Protocol):
    """Protocol for persisting the user's chosen locale."""

    async def load(self) -> LocaleId | None:
        """Saved locale, or None if nothing usable is saved.

        Raises:
            OSError: If the backing store cannot be read
        """
        ...

    async def save(self, locale: LocaleId) -> None:
        """Persist locale.

        Raises:
            OSError: If the backing store cannot be written
        """
        ...


@dataclass(frozen=True, slots=True)
class StaticCatalog:
    """Catalog defined up front in code or configuration.

    Addresses come from an explicit ``addresses`` override when present,
    otherwise from ``address_template``. Template placeholders:

        {locale}    full locale code ("en-US")
        {language}  language subtag, lowercase ("en")
        {table}     table name, lowercase ("ui")

    Example:
        >>> catalog = StaticCatalog(
        ...     locales=("en-US", "ru-RU"),
        ...     tables=("UI", "Gameplay"),
        ... )
        >>> catalog.address_for(LocaleId("en-US"), TextTableId("UI"))
        'loc_en_ui'

    Attributes:
        locales: Supported locales (plain codes or LocaleId)
        tables: Startup tables (plain names or TextTableId)
        address_template: Template used when no override exists
        addresses: Explicit (locale, table) -> address overrides
    """

    locales: tuple[LocaleId, ...]
    tables: tuple[TextTableId, ...] = ()
    address_template: str = DEFAULT_ADDRESS_TEMPLATE
    addresses: dict[tuple[LocaleId, TextTableId], Address] = field(default_factory=dict)

    def __post_init__(self) -> None:
        """Coerce identifiers and validate the template.

        Raises:
            ValueError: If no locales are given, or the template has no
                table placeholder
        """
        locales = tuple(dict.fromkeys(_as_locale(code) for code in self.locales))
        if not locales:
            msg = "StaticCatalog requires at least one locale"
            raise ValueError(msg)
        if "{table}" not in self.address_template:
            msg = (
                f"address_template must contain '{{table}}' placeholder, "
                f"got: '{self.address_template}'"
            )
            raise ValueError(msg)
        object.__setattr__(self, "locales", locales)
        object.__setattr__(
            self, "tables", tuple(dict.fromkeys(_as_table(name) for name in self.tables))
        )
        object.__setattr__(
            self,
            "addresses",
            {
                (_as_locale(locale), _as_table(table)): address
                for (locale, table), address in self.addresses.items()
            },
        )

    def supported_locales(self) -> tuple[LocaleId, ...]:
        """Configured locales, in declaration order."""
        return self.locales

    def startup_tables(self) -> tuple[TextTableId, ...]:
        """Configured startup tables, in declaration order."""
        return self.tables

    def address_for(self, locale: LocaleId, table: TextTableId) -> Address:
        """Address for (locale, table).

        Raises:
            KeyError: If locale is not supported
        """
        if locale not in self.locales:
            msg = f"Locale '{locale}' is not in this catalog"
            raise KeyError(msg)
        override = self.addresses.get((locale, table))
        if override is not None:
            return override
        # replace() instead of format() so unrelated braces survive
        return (
            self.address_template.replace("{locale}", locale.code)
            .replace("{language}", locale.language.lower())
            .replace("{table}", table.name.lower())
        )


def _as_locale(value: LocaleId | str) -> LocaleId:
    return value if isinstance(value, LocaleId) else LocaleId(value)


def _as_table(value: TextTableId | str) -> TextTableId:
    return value if isinstance(value, TextTableId) else TextTableId(value)


@dataclass(frozen=True, slots=True)
class PathTableLoader:
    """File system table loader.

    Maps an address to ``<root_dir>/<address><suffix>`` and reads it on a
    worker thread.

    Security:
        Addresses containing "..", absolute paths, or leading separators
        are rejected. The resolved path is verified against root_dir.

    Example:
        >>> loader = PathTableLoader("assets/localization")
        >>> payload = await loader.load_bytes("loc_en_ui")
        # Reads: assets/localization/loc_en_ui.json

    Attributes:
        root_dir: Directory holding the payload files
        suffix: Extension appended to each address
        max_size: Largest payload accepted, in bytes
    """

    root_dir: str | Path
    suffix: str = ".json"
    max_size: int = MAX_PAYLOAD_SIZE
    _resolved_root: Path = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.max_size <= 0:
            msg = f"max_size must be positive, got {self.max_size}"
            raise ValueError(msg)
        object.__setattr__(self, "_resolved_root", Path(self.root_dir).resolve())

    @staticmethod
    def _validate_address(address: Address) -> None:
        """Validate address for path traversal attacks and whitespace.

        Raises:
            ValueError: If address is empty or contains unsafe path components
        """
        if not address or address.strip() != address:
            msg = f"Address must be non-empty without surrounding whitespace: {address!r}"
            raise ValueError(msg)
        if Path(address).is_absolute() or address.startswith(("/", "\\")):
            msg = f"Absolute paths not allowed in address: '{address}'"
            raise ValueError(msg)
        if ".." in address:
            msg = f"Path traversal sequences not allowed in address: '{address}'"
            raise ValueError(msg)

    @staticmethod
    def _is_safe_path(base_dir: Path, full_path: Path) -> bool:
        """Check if full_path resolves to a location within base_dir."""
        try:
            full_path.resolve().relative_to(base_dir.resolve())
            return True
        except ValueError:
            return False

    def describe_path(self, address: Address) -> str:
        """Human-readable path for diagnostics."""
        return str(Path(self.root_dir) / f"{address}{self.suffix}")

    def _read(self, address: Address) -> bytes:
        self._validate_address(address)
        full_path = (self._resolved_root / f"{address}{self.suffix}").resolve()
        if not self._is_safe_path(self._resolved_root, full_path):
            msg = f"Path traversal detected: resolved path escapes root directory. address='{address}'"
            raise ValueError(msg)
        size = full_path.stat().st_size
        if size > self.max_size:
            msg = f"Payload '{address}' is {size} bytes, limit is {self.max_size}"
            raise OSError(msg)
        return full_path.read_bytes()

    async def load_bytes(self, address: Address) -> bytes:
        """Read the payload for address.

        Raises:
            ValueError: If address contains path traversal sequences
            FileNotFoundError: If the file doesn't exist
            OSError: If the file cannot be read or exceeds max_size
        """
        return await asyncio.to_thread(self._read, address)


class MemoryLocaleStorage:
    """Locale storage that lives only as long as the process.

    Example:
        >>> storage = MemoryLocaleStorage("ru-RU")
        >>> await storage.load()
        LocaleId(code='ru-RU')
    """

    __slots__ = ("_saved",)

    def __init__(self, initial: LocaleId | str | None = None) -> None:
        self._saved: LocaleId | None = None
        if isinstance(initial, LocaleId):
            self._saved = initial
        elif initial is not None and initial.strip():
            self._saved = LocaleId(initial)

    @property
    def saved(self) -> LocaleId | None:
        """Currently saved locale, or None."""
        return self._saved

    async def load(self) -> LocaleId | None:
        return self._saved

    async def save(self, locale: LocaleId) -> None:
        self._saved = locale


@dataclass(frozen=True, slots=True)
class FileLocaleStorage:
    """Locale storage backed by a UTF-8 text file holding one locale code.

    A missing, empty, or whitespace-only file loads as None. Writes go to
    a sibling temporary file that replaces the target, so a crash never
    leaves a half-written code behind.

    Attributes:
        path: File holding the saved locale code
    """

    path: Path

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", Path(self.path))

    def _read(self) -> LocaleId | None:
        try:
            text = self.path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        if not text:
            return None
        return LocaleId(text)

    def _write(self, locale: LocaleId) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = self.path.with_name(f"{self.path.name}.tmp")
        temp_path.write_text(locale.code, encoding="utf-8")
        temp_path.replace(self.path)

    async def load(self) -> LocaleId | None:
        """Saved locale, or None.

        Raises:
            OSError: If the file exists but cannot be read
        """
        return await asyncio.to_thread(self._read)

    async def save(self, locale: LocaleId) -> None:
        """Persist locale, replacing any previous value.

        Raises:
            OSError: If the file cannot be written
        """
        await asyncio.to_thread(self._write, locale)
        logger.debug("Saved locale '%s' to %s", locale, self.path)


@dataclass(frozen=True, slots=True)
class FallbackInfo:
    """Information about a locale fallback event.

    Provided to the on_fallback callback when LocalizationService resolves
    a key from the fallback locale instead of the active locale.

    Attributes:
        requested_locale: The active locale
        resolved_locale: The locale that actually contained the key
        table: Table of the resolved entry
        key: Key of the resolved entry

    Example:
        >>> def log_fallback(info: FallbackInfo) -> None:
        ...     print(f"Fallback: {info.table}.{info.key} resolved from "
        ...           f"{info.resolved_locale} (requested {info.requested_locale})")
        >>> service = LocalizationService(catalog, loader, on_fallback=log_fallback)
    """

    requested_locale: LocaleId
    resolved_locale: LocaleId
    table: TextTableId
    key: TextKey


@dataclass(frozen=True, slots=True)
class TableLoadResult:
    """Result of loading a single table for a single locale.

    Attributes:
        locale: Locale of the table
        table: Table identifier
        status: Load status (success, cached, not_found, error)
        error: Exception if status is NOT_FOUND or ERROR, None otherwise
        address: Catalog address (empty if the catalog itself failed)
        entry_count: Number of entries parsed (0 unless loaded)
    """

    locale: LocaleId
    table: TextTableId
    status: LoadStatus
    error: Exception | None = None
    address: Address = ""
    entry_count: int = 0

    @property
    def is_success(self) -> bool:
        """Check if the table is available (freshly loaded or cached)."""
        return self.status in (LoadStatus.SUCCESS, LoadStatus.CACHED)

    @property
    def is_cached(self) -> bool:
        """Check if the table was served without a fetch."""
        return self.status == LoadStatus.CACHED

    @property
    def is_not_found(self) -> bool:
        """Check if the loader reported the address missing."""
        return self.status == LoadStatus.NOT_FOUND

    @property
    def is_error(self) -> bool:
        """Check if the load failed with an error."""
        return self.status == LoadStatus.ERROR


@dataclass(frozen=True, slots=True)
class LoadSummary:
    """Immutable aggregate of table load results from one load pass.

    All statistics are computed properties derived from ``results``.
    Cancelled loads are not recorded.

    Attributes:
        results: All individual load results (immutable tuple)

    Example:
        >>> await service.set_locale_async("ru-RU")
        >>> summary = service.get_load_summary()
        >>> for result in summary.get_errors():
        ...     print(f"Failed: {result.locale}/{result.table}: {result.error}")
    """

    results: tuple[TableLoadResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[TableLoadResult]) -> LoadSummary:
        """Build a summary from any iterable of results."""
        return cls(tuple(results))

    def __repr__(self) -> str:
        """Return string representation for debugging."""
        return (
            f"LoadSummary(total={self.total_attempted}, "
            f"ok={self.successful}, "
            f"cached={self.cached}, "
            f"not_found={self.not_found}, "
            f"errors={self.errors})"
        )

    @property
    def total_attempted(self) -> int:
        """Total number of load attempts."""
        return len(self.results)

    @property
    def successful(self) -> int:
        """Number of tables made available (including cached)."""
        return sum(1 for r in self.results if r.is_success)

    @property
    def cached(self) -> int:
        """Number of tables served without a fetch."""
        return sum(1 for r in self.results if r.is_cached)

    @property
    def not_found(self) -> int:
        """Number of tables not found."""
        return sum(1 for r in self.results if r.is_not_found)

    @property
    def errors(self) -> int:
        """Number of load errors."""
        return sum(1 for r in self.results if r.is_error)

    def get_errors(self) -> tuple[TableLoadResult, ...]:
        """Get all results with errors."""
        return tuple(r for r in self.results if r.is_error)

    def get_not_found(self) -> tuple[TableLoadResult, ...]:
        """Get all results where the table was not found."""
        return tuple(r for r in self.results if r.is_not_found)

    def get_successful(self) -> tuple[TableLoadResult, ...]:
        """Get all successful load results."""
        return tuple(r for r in self.results if r.is_success)

    def get_by_locale(self, locale: LocaleId) -> tuple[TableLoadResult, ...]:
        """Get all results for a specific locale."""
        return tuple(r for r in self.results if r.locale == locale)

    @property
    def has_errors(self) -> bool:
        """Check if any table failed to load."""
        return self.errors > 0 or self.not_found > 0

    @property
    def all_successful(self) -> bool:
        """Check if every attempted table is available.

        Returns:
            True if errors == 0 and not_found == 0
        """
        return self.errors == 0 and self.not_found == 0
