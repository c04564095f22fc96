"""Contact data access: the only component that talks to the remote store.

Keeps a local projection of the last successful list. Every successful
mutation marks it stale so the next list_all() refetches; a failed mutation
leaves it untouched.
"""

import logging
from datetime import datetime, timezone

from contactbook.application.dto import Notification, Severity
from contactbook.application.errors import (
    CreateFailed,
    DeleteFailed,
    FetchFailed,
    NotFound,
    ToggleFailed,
    UpdateFailed,
)
from contactbook.application.ports import ContactStore, Notifier, Row, StoreError
from contactbook.domain import DEFAULT_CATEGORY, Category, Contact, ContactFields

logger = logging.getLogger(__name__)


def _to_datetime(value) -> datetime:
    if isinstance(value, datetime):
        dt = value
    elif hasattr(value, "to_native"):
        # neo4j.time.DateTime
        dt = value.to_native()
    else:
        dt = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def row_to_contact(row: Row) -> Contact:
    """Normalize a stored row into a Contact. Raises KeyError/ValueError on a malformed row."""
    return Contact(
        id=str(row["id"]),
        name=row["name"],
        email=row["email"],
        phone=row.get("phone") or None,
        company=row.get("company") or None,
        category=Category(row.get("category") or DEFAULT_CATEGORY),
        avatar=row.get("avatar") or None,
        favorite=bool(row.get("is_favorite")),
        created_at=_to_datetime(row["created_at"]),
    )


def fields_to_row(fields: ContactFields) -> Row:
    """Column values for insert/update. Never includes id or created_at."""
    return {
        "name": fields.name,
        "email": fields.email,
        "phone": fields.phone,
        "company": fields.company,
        "category": fields.category.value,
        "avatar": fields.avatar,
        "is_favorite": fields.favorite,
    }


_ERROR_TITLE = "Error"


class ContactRepository:
    """Create, list, update, delete and favorite contacts against a ContactStore."""

    def __init__(
        self,
        store: ContactStore,
        notifier: Notifier | None = None,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._contacts: list[Contact] | None = None
        self._stale = True

    @property
    def projection(self) -> list[Contact]:
        """Last successfully listed contacts (possibly stale). Empty before the first list_all()."""
        return list(self._contacts or [])

    @property
    def is_stale(self) -> bool:
        return self._stale

    def invalidate(self) -> None:
        self._stale = True

    async def list_all(self) -> list[Contact]:
        """Return all contacts, newest first. Uses the projection unless it is stale."""
        try:
            return await self._load()
        except FetchFailed:
            self._notify(_ERROR_TITLE, "Failed to load contacts. Please try again.")
            raise

    async def refresh(self) -> list[Contact]:
        self.invalidate()
        return await self.list_all()

    async def create(self, fields: ContactFields) -> Contact:
        logger.info("Adding contact %r", fields.name)
        try:
            contact = row_to_contact(await self._store.insert(fields_to_row(fields)))
        except (StoreError, KeyError, ValueError) as exc:
            logger.error("Error adding contact", exc_info=True)
            self._notify(_ERROR_TITLE, "Failed to add contact. Please try again.")
            raise CreateFailed("Failed to add contact.") from exc
        logger.info("Contact added: %s", contact.id)
        self.invalidate()
        self._notify(
            "Contact added",
            f"{contact.name} has been added to your contacts.",
            Severity.DEFAULT,
        )
        return contact

    async def update(self, contact_id: str, fields: ContactFields) -> Contact:
        """Replace every mutable field of the contact. The store decides whether the id exists."""
        logger.info("Updating contact %s", contact_id)
        try:
            row = await self._store.update(contact_id, fields_to_row(fields))
            contact = row_to_contact(row)
        except (StoreError, KeyError, ValueError) as exc:
            logger.error("Error updating contact %s", contact_id, exc_info=True)
            self._notify(_ERROR_TITLE, "Failed to update contact. Please try again.")
            raise UpdateFailed("Failed to update contact.", contact_id) from exc
        self.invalidate()
        self._notify(
            "Contact updated", f"{contact.name} has been updated.", Severity.DEFAULT
        )
        return contact

    async def toggle_favorite(self, contact_id: str) -> Contact:
        """Flip the favorite flag, computing the new value from the local projection.

        Another client may have changed the flag since the projection was
        loaded; in that case this writes the negation of the stale value.
        Use set_favorite to write an explicit value instead.
        """
        try:
            contacts = await self._load()
        except FetchFailed as exc:
            self._notify_toggle_error()
            raise ToggleFailed("Failed to update favorite status.", contact_id) from exc
        current = next((c for c in contacts if c.id == contact_id), None)
        if current is None:
            self._notify_toggle_error()
            raise NotFound("Contact not found.", contact_id)
        return await self.set_favorite(contact_id, not current.favorite)

    async def set_favorite(self, contact_id: str, favorite: bool) -> Contact:
        """Write an explicit favorite value. Writing the same value twice is a no-op."""
        logger.info("Setting favorite=%s for contact %s", favorite, contact_id)
        try:
            row = await self._store.update(contact_id, {"is_favorite": bool(favorite)})
            contact = row_to_contact(row)
        except (StoreError, KeyError, ValueError) as exc:
            logger.error("Error toggling favorite for %s", contact_id, exc_info=True)
            self._notify_toggle_error()
            raise ToggleFailed("Failed to update favorite status.", contact_id) from exc
        self.invalidate()
        if contact.favorite:
            self._notify(
                "Added to favorites",
                f"{contact.name} has been added to your favorites.",
                Severity.DEFAULT,
            )
        else:
            self._notify(
                "Removed from favorites",
                f"{contact.name} has been removed from your favorites.",
                Severity.DEFAULT,
            )
        return contact

    async def delete(self, contact_id: str) -> str:
        """Delete the contact. Deleting an unknown id fails rather than silently succeeding."""
        logger.info("Deleting contact %s", contact_id)
        known = next((c for c in self.projection if c.id == contact_id), None)
        try:
            await self._store.delete(contact_id)
        except StoreError as exc:
            logger.error("Error deleting contact %s", contact_id, exc_info=True)
            self._notify(_ERROR_TITLE, "Failed to delete contact. Please try again.")
            raise DeleteFailed("Failed to delete contact.", contact_id) from exc
        self.invalidate()
        name = known.name if known else "The contact"
        self._notify(
            "Contact deleted",
            f"{name} has been removed from your contacts.",
            Severity.DESTRUCTIVE,
        )
        return contact_id

    def favorite_count(self) -> int:
        return sum(1 for c in self.projection if c.favorite)

    async def _load(self) -> list[Contact]:
        if self._contacts is not None and not self._stale:
            return list(self._contacts)
        logger.info("Fetching contacts")
        try:
            rows = await self._store.select_all()
            contacts = [row_to_contact(row) for row in rows]
        except (StoreError, KeyError, ValueError) as exc:
            logger.error("Error fetching contacts", exc_info=True)
            raise FetchFailed("Failed to load contacts.") from exc
        self._contacts = contacts
        self._stale = False
        logger.info("Fetched %d contacts", len(contacts))
        return list(contacts)

    def _notify_toggle_error(self) -> None:
        self._notify(_ERROR_TITLE, "Failed to update favorite status. Please try again.")

    def _notify(
        self,
        title: str,
        description: str,
        severity: Severity = Severity.DESTRUCTIVE,
    ) -> None:
        if self._notifier is None:
            return
        self._notifier.notify(Notification(title, description, severity))
