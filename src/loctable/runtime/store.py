"""In-memory text store with atomic locale swap.

The store holds exactly one immutable LoadedLocaleSet snapshot. Readers
load the reference once per call and never lock; writers assemble a new
set off to the side and install it with a single reference assignment.
A reader therefore sees either the complete old set or the complete new
set, never a mix.

TableCache is the orchestration-side LRU of parsed tables. It is never
consulted by readers, so tables from failed or cancelled switches may sit
in it without becoming visible.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from loctable.constants import DEFAULT_MAX_CACHED_TABLES
from loctable.core.identifiers import LocaleId, TextKey, TextTableId

__all__ = [
    "LoadedLocaleSet",
    "LocalizationStore",
    "TableCache",
    "TextTable",
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextTable:
    """One locale's key -> template mapping for one table.

    Attributes:
        locale: Locale the entries belong to
        table_id: Table the entries belong to
        entries: Read-only mapping of trimmed key to template text
    """

    locale: LocaleId
    table_id: TextTableId
    entries: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not isinstance(self.entries, MappingProxyType):
            object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

    def get(self, key: TextKey | str) -> str | None:
        """Template for key, or None."""
        return self.entries.get(str(key))

    def __contains__(self, key: object) -> bool:
        return isinstance(key, TextKey | str) and str(key) in self.entries

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True, slots=True)
class LoadedLocaleSet:
    """Fully assembled set of tables for one locale.

    Instances are only constructed once every required table is parsed, so
    an installed set is always complete.

    Attributes:
        locale: Locale of the tables
        tables: Read-only mapping of table id to TextTable
        fallback: Optional set consulted when a key is missing here
            (single level; a fallback set never has a fallback of its own)
    """

    locale: LocaleId
    tables: Mapping[TextTableId, TextTable] = field(default_factory=dict)
    fallback: LoadedLocaleSet | None = None

    def __post_init__(self) -> None:
        """Freeze tables and enforce single-level fallback.

        Raises:
            ValueError: If a table belongs to another locale, or fallback
                has a fallback of its own
        """
        for table in self.tables.values():
            if table.locale != self.locale:
                msg = (
                    f"Table '{table.table_id}' belongs to '{table.locale}', "
                    f"not '{self.locale}'"
                )
                raise ValueError(msg)
        if self.fallback is not None and self.fallback.fallback is not None:
            msg = "Fallback set must not have a fallback of its own"
            raise ValueError(msg)
        if not isinstance(self.tables, MappingProxyType):
            object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    @property
    def table_ids(self) -> frozenset[TextTableId]:
        """Ids of the tables in this set (fallback excluded)."""
        return frozenset(self.tables)

    def with_fallback(self, fallback: LoadedLocaleSet | None) -> LoadedLocaleSet:
        """Copy of this set with a different fallback."""
        return LoadedLocaleSet(self.locale, self.tables, fallback)

    def find(self, table: TextTableId, key: TextKey) -> tuple[LocaleId, str] | None:
        """Look the key up here, then in the fallback.

        Returns:
            (answering locale, template), or None if neither has it
        """
        text_table = self.tables.get(table)
        if text_table is not None:
            template = text_table.get(key)
            if template is not None:
                return self.locale, template
        if self.fallback is not None:
            return self.fallback.find(table, key)
        return None


class LocalizationStore:
    """Holder of the active LoadedLocaleSet.

    Thread Safety:
        lookup() reads the snapshot reference once and never blocks.
        replace() is serialized by a lock so the previous set it returns
        is exact; readers never take that lock.

    Example:
        >>> store = LocalizationStore()
        >>> store.lookup(TextTableId("UI"), TextKey("Menu.Play")) is None
        True
    """

    __slots__ = ("_active", "_write_lock")

    def __init__(self) -> None:
        self._active: LoadedLocaleSet | None = None
        self._write_lock = threading.Lock()

    @property
    def snapshot(self) -> LoadedLocaleSet | None:
        """Currently installed set, or None."""
        return self._active

    @property
    def active_locale(self) -> LocaleId | None:
        """Locale of the installed set, or None."""
        active = self._active
        return active.locale if active is not None else None

    def lookup(self, table: TextTableId, key: TextKey) -> str | None:
        """Template for (table, key) from the active set, then its fallback.

        Returns:
            Template text, or None if missing everywhere or nothing installed
        """
        entry = self.lookup_entry(table, key)
        return entry[1] if entry is not None else None

    def lookup_entry(
        self, table: TextTableId, key: TextKey
    ) -> tuple[LocaleId, str] | None:
        """Like lookup(), but also reports which locale answered."""
        active = self._active
        if active is None:
            return None
        return active.find(table, key)

    def replace(
        self, active: LoadedLocaleSet, fallback: LoadedLocaleSet | None = None
    ) -> LoadedLocaleSet | None:
        """Install a new set in one step.

        Args:
            active: Fully assembled set for the new locale
            fallback: Fallback set (optional). When given it replaces any
                fallback already attached to active.

        Returns:
            The previously installed set, or None
        """
        if fallback is not None:
            active = active.with_fallback(fallback)
        with self._write_lock:
            previous, self._active = self._active, active
        logger.debug(
            "Installed locale set '%s' (%d tables, fallback=%s)",
            active.locale,
            len(active.tables),
            active.fallback.locale if active.fallback is not None else None,
        )
        return previous

    def clear(self) -> None:
        """Drop the installed set."""
        with self._write_lock:
            self._active = None


class TableCache:
    """Bounded LRU of parsed tables keyed by (locale, table).

    Thread Safety:
        All operations hold an internal lock.

    Args:
        max_size: Maximum tables kept (default: DEFAULT_MAX_CACHED_TABLES)

    Raises:
        ValueError: If max_size is not positive
    """

    __slots__ = ("_entries", "_hits", "_lock", "_max_size", "_misses")

    def __init__(self, max_size: int = DEFAULT_MAX_CACHED_TABLES) -> None:
        if max_size <= 0:
            msg = f"max_size must be positive, got {max_size}"
            raise ValueError(msg)
        self._max_size = max_size
        self._entries: OrderedDict[tuple[LocaleId, TextTableId], TextTable] = (
            OrderedDict()
        )
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    @property
    def max_size(self) -> int:
        """Capacity."""
        return self._max_size

    @property
    def hits(self) -> int:
        """Number of get() calls that found a table."""
        return self._hits

    @property
    def misses(self) -> int:
        """Number of get() calls that found nothing."""
        return self._misses

    def get(self, locale: LocaleId, table: TextTableId) -> TextTable | None:
        """Cached table, marked most recently used, or None."""
        with self._lock:
            cached = self._entries.get((locale, table))
            if cached is None:
                self._misses += 1
                return None
            self._entries.move_to_end((locale, table))
            self._hits += 1
            return cached

    def put(self, table: TextTable) -> None:
        """Cache table, evicting the least recently used one when full."""
        cache_key = (table.locale, table.table_id)
        with self._lock:
            self._entries[cache_key] = table
            self._entries.move_to_end(cache_key)
            while len(self._entries) > self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted table '%s' for '%s' from cache", evicted[1], evicted[0])

    def __contains__(self, cache_key: object) -> bool:
        with self._lock:
            return cache_key in self._entries

    def __iter__(self) -> Iterator[tuple[LocaleId, TextTableId]]:
        with self._lock:
            return iter(tuple(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def clear(self) -> None:
        """Drop every cached table and reset statistics."""
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
