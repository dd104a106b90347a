"""JSON wire format for localization tables.

Payload layout (UTF-8, a leading BOM is tolerated):

    {
      "locale": "en-US",
      "table": "UI",
      "entries": {"Menu.Play": "Play", "Greeting": "Hello, {name}!"}
    }

``locale`` and ``table`` are optional; when present they must match the
requested pair. ``entries`` is required and must be a non-empty object.
Blank keys are skipped and keys are trimmed. String values are kept as is,
``null`` becomes "", and any other JSON value is stored as compact JSON
text (so ``3`` becomes "3" and ``true`` becomes "true").

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import json
import logging
from typing import Protocol

from loctable.constants import MAX_PAYLOAD_SIZE
from loctable.core.identifiers import LocaleId, TextTableId
from loctable.diagnostics import TableParseError
from loctable.runtime.store import TextTable

__all__ = ["JsonTableParser", "TableParser"]

logger = logging.getLogger(__name__)


class TableParser(Protocol):
    """Protocol for turning payload bytes into a TextTable."""

    def parse_table(self, payload: bytes, locale: LocaleId, table: TextTableId) -> TextTable:
        """Parse payload as the given (locale, table).

        Raises:
            TableParseError: If payload does not encode a usable table
        """
        ...


class JsonTableParser:
    """Parser for the JSON table format described in the module docstring.

    Example:
        >>> parser = JsonTableParser()
        >>> table = parser.parse_table(
        ...     b'{"entries": {"Menu.Play": "Play"}}', LocaleId("en-US"), TextTableId("UI")
        ... )
        >>> table.get("Menu.Play")
        'Play'
    """

    __slots__ = ("_max_size",)

    def __init__(self, max_size: int = MAX_PAYLOAD_SIZE) -> None:
        if max_size <= 0:
            msg = f"max_size must be positive, got {max_size}"
            raise ValueError(msg)
        self._max_size = max_size

    def parse_table(self, payload: bytes, locale: LocaleId, table: TextTableId) -> TextTable:
        """Parse payload into a TextTable for (locale, table).

        Args:
            payload: Raw bytes from the loader
            locale: Requested locale
            table: Requested table

        Returns:
            Immutable TextTable

        Raises:
            TableParseError: If payload is empty, oversized, not UTF-8 JSON,
                mismatched, or has no usable entries
        """

        def fail(message: str) -> TableParseError:
            return TableParseError(message, locale=locale, table=table)

        if not payload:
            raise fail("Payload is empty")
        if len(payload) > self._max_size:
            msg = f"Payload is {len(payload)} bytes, limit is {self._max_size}"
            raise fail(msg)

        try:
            root = json.loads(payload.decode("utf-8-sig"))
        except UnicodeDecodeError as e:
            raise fail(f"Payload is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise fail(f"Payload is not valid JSON: {e}") from e

        if not isinstance(root, dict):
            raise fail("Localization JSON root must be an object")

        file_locale = self._read_optional_string(root, "locale", locale, table)
        if file_locale is not None and LocaleId(file_locale) != locale:
            msg = f"Locale mismatch. Requested '{locale}', file '{file_locale.strip()}'"
            raise fail(msg)

        file_table = self._read_optional_string(root, "table", locale, table)
        if file_table is not None and TextTableId(file_table) != table:
            msg = f"Table mismatch. Requested '{table}', file '{file_table.strip()}'"
            raise fail(msg)

        if "entries" not in root:
            raise fail("Localization JSON missing 'entries'")
        entries_node = root["entries"]
        if not isinstance(entries_node, dict):
            raise fail("Localization JSON 'entries' must be an object")

        entries: dict[str, str] = {}
        for raw_key, value in entries_node.items():
            key = raw_key.strip()
            if not key:
                continue
            entries[key] = self._value_as_text(value)

        if not entries:
            raise fail("Localization JSON 'entries' is empty")

        logger.debug("Parsed table '%s' for '%s' (%d entries)", table, locale, len(entries))
        return TextTable(locale, table, entries)

    @staticmethod
    def _read_optional_string(
        root: dict[str, object], name: str, locale: LocaleId, table: TextTableId
    ) -> str | None:
        value = root.get(name)
        if value is None:
            return None
        if not isinstance(value, str):
            msg = f"Localization JSON '{name}' must be a string"
            raise TableParseError(msg, locale=locale, table=table)
        return value if value.strip() else None

    @staticmethod
    def _value_as_text(value: object) -> str:
        match value:
            case None:
                return ""
            case str():
                return value
            case _:
                return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
