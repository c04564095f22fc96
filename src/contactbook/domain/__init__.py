"""Domain layer: entities and value objects. No dependencies on outer layers."""

from contactbook.domain.entities import (
    DEFAULT_CATEGORY,
    Category,
    Contact,
    ContactFields,
)

__all__ = ["Category", "Contact", "ContactFields", "DEFAULT_CATEGORY"]
