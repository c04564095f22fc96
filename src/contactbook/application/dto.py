"""Notification payloads and result types returned to the UI layer."""

from dataclasses import dataclass
from enum import Enum

from contactbook.application.errors import ContactError
from contactbook.domain import Contact, ContactFields


class Severity(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """Title, description and severity shown to the user after a mutation."""

    title: str
    description: str
    severity: Severity = Severity.DEFAULT


class FormMode(str, Enum):
    ADD = "add"
    EDIT = "edit"


# --- submit results ---


@dataclass(frozen=True)
class Invalid:
    """Form input rejected before any remote call (e.g. empty name or email)."""

    reason: str


@dataclass(frozen=True)
class Saved:
    """The contact was created or updated by the store."""

    contact: Contact
    mode: FormMode


@dataclass(frozen=True)
class SaveFailed:
    """The store rejected a create or update. Carries what was attempted so the form can be reopened."""

    error: ContactError
    mode: FormMode
    fields: ContactFields
    target: Contact | None = None

    @property
    def contact_id(self) -> str | None:
        return self.target.id if self.target else None


# --- toggle / delete results ---


@dataclass(frozen=True)
class ActionFailed:
    """A toggle-favorite or delete failed. The user was already notified."""

    error: ContactError
    contact_id: str
