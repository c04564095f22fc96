"""
Contactbook core: clean-architecture layout.

- domain: entities (Contact, ContactFields, Category). No outer dependencies.
- application: ContactRepository, ContactViewController, derive_view, export, ports, DTOs.
- infrastructure: adapters (InMemoryContactStore, Neo4jContactStore, LoggingNotifier).
"""

from contactbook.application import (
    ALL_CATEGORIES,
    ActionFailed,
    ContactError,
    ContactRepository,
    ContactStore,
    ContactViewController,
    CreateFailed,
    DeleteFailed,
    EmptyState,
    FetchFailed,
    FormMode,
    FormState,
    Invalid,
    NotFound,
    Notification,
    Notifier,
    RecordNotFound,
    SaveFailed,
    Saved,
    Severity,
    StoreError,
    ToggleFailed,
    UpdateFailed,
    derive_view,
)
from contactbook.domain import Category, Contact, ContactFields
from contactbook.infrastructure import (
    InMemoryContactStore,
    LoggingNotifier,
    Neo4jContactStore,
)

__all__ = [
    "ALL_CATEGORIES",
    "ActionFailed",
    "Category",
    "Contact",
    "ContactError",
    "ContactFields",
    "ContactRepository",
    "ContactStore",
    "ContactViewController",
    "CreateFailed",
    "DeleteFailed",
    "EmptyState",
    "FetchFailed",
    "FormMode",
    "FormState",
    "InMemoryContactStore",
    "Invalid",
    "LoggingNotifier",
    "Neo4jContactStore",
    "NotFound",
    "Notification",
    "Notifier",
    "RecordNotFound",
    "SaveFailed",
    "Saved",
    "Severity",
    "StoreError",
    "ToggleFailed",
    "UpdateFailed",
    "derive_view",
]
