"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Any, Protocol

from contactbook.application.dto import Notification

# Column names of the remote "contacts" table.
COLUMNS = (
    "id",
    "name",
    "email",
    "phone",
    "company",
    "category",
    "avatar",
    "is_favorite",
    "created_at",
)

Row = dict[str, Any]


class StoreError(Exception):
    """Any failure of the remote contact store (network, driver, query)."""


class RecordNotFound(StoreError):
    """The store has no row with the requested id."""

    def __init__(self, row_id: str) -> None:
        super().__init__(f"No contact with id {row_id!r}.")
        self.row_id = row_id


class ContactStore(Protocol):
    """Remote CRUD service over the contacts table. Every method may raise StoreError."""

    async def select_all(self) -> list[Row]:
        """Return all rows, newest created_at first."""
        ...

    async def insert(self, values: Row) -> Row:
        """Insert one row and return it. The store assigns id and created_at."""
        ...

    async def update(self, row_id: str, values: Row) -> Row:
        """Set the given columns on one row and return the updated row."""
        ...

    async def delete(self, row_id: str) -> None:
        """Delete one row. Raises RecordNotFound if it does not exist."""
        ...


class Notifier(Protocol):
    """Receives user-facing feedback after every mutation attempt."""

    def notify(self, notification: Notification) -> None:
        ...
