"""Domain entities: Category, ContactFields, and Contact."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from contactbook.domain.phone import clean_phone


class Category(str, Enum):
    """Fixed contact classification."""

    WORK = "work"
    PERSONAL = "personal"
    FAMILY = "family"
    OTHER = "other"

    def __str__(self) -> str:
        return self.value


DEFAULT_CATEGORY = Category.PERSONAL


def _optional_text(value: str | None) -> str | None:
    if value is None:
        return None
    return str(value).strip() or None


@dataclass(frozen=True)
class ContactFields:
    """
    The replaceable part of a contact: everything except id and created_at.
    Used as the payload of create and update, so it is validated on construction.
    """

    name: str = ""
    email: str = ""
    phone: str | None = None
    company: str | None = None
    category: Category = DEFAULT_CATEGORY
    avatar: str | None = None
    favorite: bool = False

    def __post_init__(self):
        name = (self.name or "").strip()
        if not name:
            raise ValueError("Contact name must be non-empty.")
        email = (self.email or "").strip()
        if not email:
            raise ValueError("Contact email must be non-empty.")
        category = self.category if self.category is not None else DEFAULT_CATEGORY
        try:
            category = Category(category)
        except ValueError:
            raise ValueError(
                f"Contact category must be one of: {', '.join(c.value for c in Category)}."
            ) from None
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "email", email)
        object.__setattr__(self, "phone", clean_phone(self.phone))
        object.__setattr__(self, "company", _optional_text(self.company))
        object.__setattr__(self, "category", category)
        object.__setattr__(self, "avatar", _optional_text(self.avatar))
        object.__setattr__(self, "favorite", bool(self.favorite))


@dataclass(frozen=True)
class Contact:
    """
    A stored contact. The id and created_at are assigned by the store when the
    record is inserted and never change afterwards.
    """

    id: str
    name: str
    email: str
    created_at: datetime
    phone: str | None = None
    company: str | None = None
    category: Category = DEFAULT_CATEGORY
    avatar: str | None = None
    favorite: bool = field(default=False)

    def fields(self) -> ContactFields:
        """Return the replaceable fields, e.g. to prefill an edit form."""
        return ContactFields(
            name=self.name,
            email=self.email,
            phone=self.phone,
            company=self.company,
            category=self.category,
            avatar=self.avatar,
            favorite=self.favorite,
        )

    @property
    def initials(self) -> str:
        """Up to two upper-case initials, shown when there is no avatar."""
        return "".join(word[0] for word in self.name.split())[:2].upper()
