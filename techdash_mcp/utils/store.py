"""SQLite persistence for repair requests."""

from __future__ import annotations

import json
import logging
import sqlite3
from collections.abc import Iterator
from contextlib import closing, contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from techdash_mcp.config import load_settings
from techdash_mcp.enums import RequestStatus
from techdash_mcp.exceptions import RequestNotFoundError, StoreError
from techdash_mcp.models.request import RequestModel
from techdash_mcp.utils.parsers import _parse_request
from techdash_mcp.validation import status_value

logger = logging.getLogger(__name__)

_SCHEMA = """CREATE TABLE IF NOT EXISTS requests (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    vehicle_job_id TEXT NOT NULL,
    registration TEXT NOT NULL,
    work_description TEXT NOT NULL,
    status TEXT NOT NULL,
    overall_labour_hours REAL,
    tasks TEXT NOT NULL DEFAULT '[]'
)"""

_COLUMNS = ("vehicle_job_id", "registration", "work_description", "status", "overall_labour_hours", "tasks")

# Column names used by databases written before the rename
_LEGACY_COLUMNS = {
    "vehicle_job_id": "wip",
    "registration": "reg",
    "work_description": "work",
    "overall_labour_hours": "overallLabour",
}

# Fill values for NOT NULL columns the old schema left nullable
_COLUMN_DEFAULTS = {
    "vehicle_job_id": "''",
    "registration": "''",
    "work_description": "''",
    "status": "'pending'",
    "tasks": "'[]'",
}


def _request_to_row(request: RequestModel) -> dict[str, Any]:
    """Flatten a RequestModel into column values."""
    return {
        "vehicle_job_id": request.vehicle_job_id,
        "registration": request.registration,
        "work_description": request.work_description,
        "status": status_value(request.status),
        "overall_labour_hours": request.overall_labour_hours,
        "tasks": json.dumps([t.model_dump(mode="json") for t in request.tasks]),
    }


def _row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    data = dict(row)
    raw_tasks = data.get("tasks")
    try:
        data["tasks"] = json.loads(raw_tasks) if raw_tasks else []
    except json.JSONDecodeError:
        logger.warning("Request %s has unreadable tasks data; treating it as flat-rate", data.get("id"))
        data["tasks"] = []
    return data


def _upgrade_schema(con: sqlite3.Connection) -> bool:
    """
    Rebuild a ``requests`` table created with the old column names.

    Ids are kept. Values are copied as stored; status spellings and task
    fields are left for ``RequestStore.migrate_legacy_rows``.

    Returns:
        True if the table was rebuilt
    """
    columns = {row[1] for row in con.execute("PRAGMA table_info(requests)")}
    if not columns or set(_COLUMNS) <= columns:
        return False

    sources = []
    for column in _COLUMNS:
        legacy = _LEGACY_COLUMNS.get(column, column)
        source = column if column in columns else legacy if legacy in columns else "NULL"
        if column in _COLUMN_DEFAULTS:
            source = f"COALESCE({source}, {_COLUMN_DEFAULTS[column]})"
        sources.append(source)

    con.execute("ALTER TABLE requests RENAME TO requests_legacy")
    con.execute(_SCHEMA)
    con.execute(
        f"INSERT INTO requests (id, {', '.join(_COLUMNS)}) "
        f"SELECT id, {', '.join(sources)} FROM requests_legacy ORDER BY id"
    )
    con.execute("DROP TABLE requests_legacy")
    logger.info("Rebuilt requests table with current column names")
    return True


class RequestStore:
    """
    Requests persisted in a single SQLite table.

    Each operation opens its own connection and commits before closing, so
    concurrent writers to the same request are last-write-wins.
    """

    def __init__(self, db_path: Path | str):
        self.db_path = Path(db_path)
        with self._connect() as con:
            if not _upgrade_schema(con):
                con.execute(_SCHEMA)

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        try:
            with closing(sqlite3.connect(self.db_path)) as con:
                con.row_factory = sqlite3.Row
                with con:
                    yield con
        except sqlite3.Error as e:
            raise StoreError(f"Database error at {self.db_path}: {e}") from e

    def list(self, status: RequestStatus | None = None) -> list[RequestModel]:
        """
        Return stored requests in id order, optionally filtered by status.

        Rows that do not form a valid request (a blank registration, say) are
        logged and left out.
        """
        with self._connect() as con:
            if status is None:
                rows = con.execute("SELECT * FROM requests ORDER BY id").fetchall()
            else:
                rows = con.execute(
                    "SELECT * FROM requests WHERE status = ? ORDER BY id", (status_value(status),)
                ).fetchall()
        requests = []
        for row in rows:
            try:
                requests.append(_parse_request(_row_to_dict(row)))
            except ValidationError as e:
                logger.warning("Skipping unreadable request %s: %s", row["id"], e)
        return requests

    def get(self, request_id: int) -> RequestModel:
        with self._connect() as con:
            row = con.execute("SELECT * FROM requests WHERE id = ?", (request_id,)).fetchone()
        if row is None:
            raise RequestNotFoundError(request_id)
        return _parse_request(_row_to_dict(row))

    def create(self, request: RequestModel) -> RequestModel:
        """Insert a request and return it with its assigned id."""
        values = _request_to_row(request)
        with self._connect() as con:
            cur = con.execute(
                f"INSERT INTO requests ({', '.join(_COLUMNS)}) VALUES ({', '.join('?' for _ in _COLUMNS)})",
                [values[c] for c in _COLUMNS],
            )
            request_id = cur.lastrowid
        logger.info("Created request %s for %s", request_id, request.registration)
        return request.model_copy(update={"id": request_id})

    def update(self, request_id: int, partial: dict[str, Any]) -> None:
        """
        Update some fields of a stored request.

        ``partial`` may hold any RequestModel field except ``id``, plus the
        flat ``tasks`` / ``overall_labour_hours`` pair. The merged request is
        re-validated, so an itemised request's status is re-derived.
        """
        if "id" in partial:
            raise StoreError("The id of a request cannot be changed")

        current = self.get(request_id)
        data = current.model_dump(exclude={"billing"})
        data["tasks"] = [t.model_dump() for t in current.tasks]
        data["overall_labour_hours"] = current.overall_labour_hours
        if "billing" in partial:
            data.pop("tasks")
            data.pop("overall_labour_hours")
        data.update(partial)
        merged = RequestModel.model_validate(data)

        values = _request_to_row(merged)
        with self._connect() as con:
            con.execute(
                f"UPDATE requests SET {', '.join(f'{c} = ?' for c in _COLUMNS)} WHERE id = ?",
                [values[c] for c in _COLUMNS] + [request_id],
            )
        logger.info("Updated request %s (status: %s)", request_id, values["status"])

    def save(self, request: RequestModel) -> None:
        """Write back a whole request previously read from this store."""
        if request.id is None:
            raise StoreError("Cannot save a request that has not been created")
        self.update(request.id, {"billing": request.billing.model_dump(), "status": request.status})

    def delete(self, request_id: int) -> None:
        with self._connect() as con:
            cur = con.execute("DELETE FROM requests WHERE id = ?", (request_id,))
            if cur.rowcount == 0:
                raise RequestNotFoundError(request_id)
        logger.info("Deleted request %s", request_id)

    def migrate_legacy_rows(self) -> int:
        """
        Rewrite rows stored with legacy status spellings or task fields.

        Returns:
            Number of rows rewritten
        """
        migrated = 0
        with self._connect() as con:
            rows = con.execute("SELECT * FROM requests ORDER BY id").fetchall()
            for row in rows:
                stored = dict(row)
                try:
                    canonical = _request_to_row(_parse_request(_row_to_dict(row)))
                except ValidationError as e:
                    logger.warning("Skipping request %s during migration: %s", stored["id"], e)
                    continue
                if all(stored.get(c) == canonical[c] for c in _COLUMNS):
                    continue
                con.execute(
                    f"UPDATE requests SET {', '.join(f'{c} = ?' for c in _COLUMNS)} WHERE id = ?",
                    [canonical[c] for c in _COLUMNS] + [stored["id"]],
                )
                migrated += 1
        if migrated:
            logger.info("Migrated %d request(s) to the current status taxonomy", migrated)
        return migrated


@lru_cache(maxsize=None)
def _open_store(db_path: str) -> RequestStore:
    store = RequestStore(db_path)
    store.migrate_legacy_rows()
    return store


def get_store() -> RequestStore:
    """Return the store for the configured database, migrating it on first use."""
    return _open_store(str(load_settings().db_path))
