"""SQLite record store with filtered and sorted queries.

A single ``DBClient`` wraps one aiosqlite connection. It is opened once at
process start and handed to every component that needs the store.

Filter grammar: ``field op "value"`` joined with ``&&``, where op is one of
``= != < <= > >=``. Sort grammar: comma-separated ``+field`` / ``-field``;
empty values always sort last.
"""

import json
import logging
import operator
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import Any

import aiosqlite

from hausgeist.core.config import settings


logger = logging.getLogger(__name__)

FilterValue = str | int | float | bool | None

_COMPARATORS: dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_CONDITION_RE = re.compile(r'\s*([A-Za-z_]\w*)\s*(!=|>=|<=|=|<|>)\s*"((?:[^"\\]|\\.)*)"\s*')
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_]\w*$")


class DatabaseError(RuntimeError):
    """Raised when a database operation fails."""


class RecordNotFoundError(KeyError):
    """Raised when updating a record that does not exist."""


@dataclass(frozen=True)
class FilterCondition:
    """One ``field op value`` comparison from a filter query."""

    field: str
    op: str
    value: FilterValue

    def to_sql(self) -> str:
        return f"{self.field} {self.op} ?"

    def matches(self, record: dict[str, Any]) -> bool:
        """Evaluate the comparison in Python with SQL NULL semantics."""
        actual = record.get(self.field)
        if actual is None or self.value is None:
            return False
        if isinstance(actual, bool):
            actual = int(actual)
        expected = int(self.value) if isinstance(self.value, bool) else self.value
        # Text columns compare numbers as text
        if isinstance(actual, str) != isinstance(expected, str):
            return _COMPARATORS[self.op](str(actual), str(expected))
        return _COMPARATORS[self.op](actual, expected)


def sanitize_param(value: FilterValue) -> str:
    """Escape a value for safe embedding in a filter query via json.dumps."""
    return json.dumps(str(value))[1:-1]


def _validate_identifier(name: str, kind: str = "collection") -> None:
    """Validate that a collection or column name contains only alphanumeric characters and underscores."""
    if not _IDENTIFIER_RE.match(name):
        msg = f"Invalid {kind} name: {name}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def _parse_value(raw: str) -> FilterValue:
    """Parse a quoted filter value to the matching Python type."""
    value = json.loads(f'"{raw}"')
    if value.isdigit():
        return int(value)
    if value.replace(".", "", 1).isdigit():
        return float(value)
    if value.lower() == "true":
        return True
    if value.lower() == "false":
        return False
    return value


def parse_filter(filter_query: str) -> list[FilterCondition]:
    """Parse a filter query into its AND-ed conditions."""
    conditions: list[FilterCondition] = []
    if not filter_query.strip():
        return conditions

    pos = 0
    while pos < len(filter_query):
        match = _CONDITION_RE.match(filter_query, pos)
        if not match:
            msg = f"Invalid filter syntax: {filter_query[pos:]}"
            raise ValueError(msg)
        field, op, raw_value = match.groups()
        conditions.append(FilterCondition(field=field, op=op, value=_parse_value(raw_value)))
        pos = match.end()
        if pos < len(filter_query):
            if not filter_query.startswith("&&", pos):
                msg = f"Expected '&&' in filter at position {pos}: {filter_query}"
                raise ValueError(msg)
            pos += 2
            if not filter_query[pos:].strip():
                msg = f"Dangling '&&' at end of filter: {filter_query}"
                raise ValueError(msg)

    return conditions


def parse_sort(sort: str) -> list[tuple[str, bool]]:
    """Parse ``+field,-field`` into (field, descending) pairs."""
    keys: list[tuple[str, bool]] = []
    for raw_part in sort.split(","):
        part = raw_part.strip()
        if not part:
            continue
        descending = part.startswith("-")
        field = part.lstrip("+-")
        if not _IDENTIFIER_RE.match(field):
            msg = f"Invalid sort field: {field}"
            raise ValueError(msg)
        keys.append((field, descending))
    return keys


def _to_db_value(value: object) -> object:
    """Convert Python values to something SQLite stores."""
    if isinstance(value, datetime):
        return value.isoformat(timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, dict | list):
        return json.dumps(value)
    return value


def _convert_record_ids(record: dict[str, Any]) -> dict[str, Any]:
    """Convert the integer primary key to a string id."""
    converted = record.copy()
    if isinstance(converted.get("id"), int):
        converted["id"] = str(converted["id"])
    return converted


def get_db_path(db_path: str | None = None) -> Path:
    """Get the resolved SQLite database file path."""
    path_str = db_path or settings.sqlite_db_path
    return Path(path_str).resolve()


class DBClient:
    """Async record store over one SQLite connection."""

    def __init__(
        self,
        connection: aiosqlite.Connection,
        *,
        db_path: str,
        now: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._conn = connection
        self.db_path = db_path
        self._now = now

    @classmethod
    async def connect(cls, db_path: str | None = None, *, now: Callable[[], datetime] = datetime.now) -> "DBClient":
        """Open the database file (created on first use) and return a client handle."""
        if db_path == ":memory:":
            target = db_path
        else:
            path = get_db_path(db_path)
            path.parent.mkdir(parents=True, exist_ok=True)
            target = str(path)

        conn = await aiosqlite.connect(target)
        if target != ":memory:":
            await conn.execute("PRAGMA journal_mode = WAL")

        logger.info("Opened SQLite connection", extra={"db_path": target})
        return cls(conn, db_path=target, now=now)

    async def close(self) -> None:
        """Close the underlying connection."""
        await self._conn.close()
        logger.info("Closed SQLite connection", extra={"db_path": self.db_path})

    def _timestamp(self) -> str:
        return self._now().isoformat(timespec="seconds")

    async def execute_script(self, script: str) -> None:
        """Run a multi-statement SQL script (used for schema setup)."""
        await self._conn.executescript(script)
        await self._conn.commit()

    async def _fetch_by_id(self, collection: str, record_id: str) -> dict[str, Any] | None:
        query = f"SELECT * FROM {collection} WHERE id = ?"  # noqa: S608 - collection is validated
        cursor = await self._conn.execute(query, (int(record_id),))
        row = await cursor.fetchone()
        if row is None:
            return None
        columns = [description[0] for description in cursor.description]
        return _convert_record_ids(dict(zip(columns, row, strict=True)))

    async def create_record(self, *, collection: str, data: dict[str, Any]) -> dict[str, Any]:
        """Insert a new record and return it with its assigned id and timestamps."""
        _validate_identifier(collection)
        now = self._timestamp()
        payload = {**data, "created_at": now, "updated_at": now}
        columns = list(payload.keys())
        for column in columns:
            _validate_identifier(column, "column")

        try:
            query = (
                f"INSERT INTO {collection} ({', '.join(columns)}) "  # noqa: S608 - names are validated
                f"VALUES ({', '.join('?' for _ in columns)})"
            )
            cursor = await self._conn.execute(query, [_to_db_value(payload[c]) for c in columns])
            await self._conn.commit()
            record = await self._fetch_by_id(collection, str(cursor.lastrowid))
        except Exception as e:
            logger.error("create_record_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to create record in {collection}: {e}"
            raise DatabaseError(msg) from e

        if record is None:
            msg = f"Record vanished after insert in {collection}"
            raise DatabaseError(msg)

        logger.info("Created record", extra={"collection": collection, "record_id": record["id"]})
        return record

    async def get_record(self, *, collection: str, record_id: str) -> dict[str, Any] | None:
        """Fetch a single record by ID, or None if it does not exist."""
        _validate_identifier(collection)
        if not record_id.isdigit():
            return None

        try:
            record = await self._fetch_by_id(collection, record_id)
        except Exception as e:
            logger.error("get_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
            msg = f"Failed to get record from {collection}: {e}"
            raise DatabaseError(msg) from e

        logger.debug("Retrieved record", extra={"collection": collection, "record_id": record_id})
        return record

    async def update_record(self, *, collection: str, record_id: str, data: dict[str, Any]) -> dict[str, Any]:
        """Update a record by ID and return the updated record."""
        if not data:
            msg = "Empty update payload"
            raise ValueError(msg)
        _validate_identifier(collection)
        payload = {**data, "updated_at": self._timestamp()}
        for column in payload:
            _validate_identifier(column, "column")

        try:
            set_clause = ", ".join(f"{key} = ?" for key in payload)
            values = [_to_db_value(v) for v in payload.values()]
            values.append(int(record_id))
            query = f"UPDATE {collection} SET {set_clause} WHERE id = ?"  # noqa: S608 - names are validated
            cursor = await self._conn.execute(query, values)
            await self._conn.commit()
            updated_rows = cursor.rowcount
            record = await self._fetch_by_id(collection, record_id)
        except Exception as e:
            logger.error("update_record_failed", extra={"collection": collection, "record_id": record_id, "error": str(e)})
            msg = f"Failed to update record in {collection}: {e}"
            raise DatabaseError(msg) from e

        if updated_rows == 0 or record is None:
            msg = f"Record not found in {collection}: {record_id}"
            raise RecordNotFoundError(msg)

        logger.info("Updated record", extra={"collection": collection, "record_id": record_id})
        return record

    async def list_records(
        self,
        *,
        collection: str,
        filter_query: str = "",
        sort: str = "",
        page: int = 1,
        per_page: int = 100,
    ) -> list[dict[str, Any]]:
        """List records with optional filtering, sorting, and pagination."""
        _validate_identifier(collection)
        conditions = parse_filter(filter_query)
        sort_keys = parse_sort(sort)

        where_clause = ""
        params: list[object] = [_to_db_value(c.value) for c in conditions]
        if conditions:
            where_clause = "WHERE " + " AND ".join(c.to_sql() for c in conditions)

        order_parts = []
        for field, descending in sort_keys:
            order_parts.append(f"({field} IS NULL)")
            order_parts.append(f"{field} {'DESC' if descending else 'ASC'}")
        order_parts.append("id ASC")

        offset = (page - 1) * per_page
        query = (
            f"SELECT * FROM {collection} {where_clause} "  # noqa: S608 - names are validated
            f"ORDER BY {', '.join(order_parts)} LIMIT ? OFFSET ?"
        )
        params.extend([per_page, offset])

        try:
            cursor = await self._conn.execute(query, params)
            rows = await cursor.fetchall()
            columns = [description[0] for description in cursor.description]
        except Exception as e:
            logger.error("list_records_failed", extra={"collection": collection, "error": str(e)})
            msg = f"Failed to list records from {collection}: {e}"
            raise DatabaseError(msg) from e

        records = [_convert_record_ids(dict(zip(columns, row, strict=True))) for row in rows]
        logger.debug("Listed records", extra={"collection": collection, "count": len(records)})
        return records
