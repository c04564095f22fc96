"""In-memory implementation of ContactStore (no DB)."""

import uuid
from collections.abc import Callable
from datetime import datetime, timezone

from contactbook.application.ports import COLUMNS, RecordNotFound, Row, StoreError

_READ_ONLY = ("id", "created_at")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryContactStore:
    """Stores contact rows in memory. Assigns ids and timestamps like the remote table does.
    calls records every operation, so tests can assert that no remote call happened.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock
        self._rows: dict[str, Row] = {}
        self._seq: dict[str, int] = {}  # row id -> insertion counter, breaks created_at ties
        self._counter = 0
        self._failures: dict[str, StoreError] = {}
        self.calls: list[str] = []

    def fail_next(self, operation: str, error: StoreError | None = None) -> None:
        """Make the next call of operation (select_all/insert/update/delete) raise."""
        self._failures[operation] = error or StoreError(f"{operation} failed")

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        error = self._failures.pop(operation, None)
        if error is not None:
            raise error

    async def select_all(self) -> list[Row]:
        self._enter("select_all")
        ordered = sorted(
            self._rows.values(),
            key=lambda row: (row["created_at"], self._seq[row["id"]]),
            reverse=True,
        )
        return [dict(row) for row in ordered]

    async def insert(self, values: Row) -> Row:
        self._enter("insert")
        _check_columns(values)
        row: Row = {column: None for column in COLUMNS}
        row["is_favorite"] = False
        row.update({k: v for k, v in values.items() if k not in _READ_ONLY})
        row["id"] = str(uuid.uuid4())
        row["created_at"] = self._clock()
        self._counter += 1
        self._seq[row["id"]] = self._counter
        self._rows[row["id"]] = row
        return dict(row)

    async def update(self, row_id: str, values: Row) -> Row:
        self._enter("update")
        _check_columns(values)
        row = self._rows.get(row_id)
        if row is None:
            raise RecordNotFound(row_id)
        row.update({k: v for k, v in values.items() if k not in _READ_ONLY})
        return dict(row)

    async def delete(self, row_id: str) -> None:
        self._enter("delete")
        if self._rows.pop(row_id, None) is None:
            raise RecordNotFound(row_id)
        del self._seq[row_id]


def _check_columns(values: Row) -> None:
    unknown = set(values) - set(COLUMNS)
    if unknown:
        raise StoreError(f"Unknown columns: {', '.join(sorted(unknown))}")
