"""Application layer: repository, view controller, ports, and DTOs. Depends only on domain."""

from contactbook.application.contact_repository import ContactRepository
from contactbook.application.dto import (
    ActionFailed,
    FormMode,
    Invalid,
    Notification,
    SaveFailed,
    Saved,
    Severity,
)
from contactbook.application.errors import (
    ContactError,
    CreateFailed,
    DeleteFailed,
    FetchFailed,
    NotFound,
    ToggleFailed,
    UpdateFailed,
)
from contactbook.application.filtering import ALL_CATEGORIES, derive_view
from contactbook.application.ports import (
    ContactStore,
    Notifier,
    RecordNotFound,
    StoreError,
)
from contactbook.application.view_controller import (
    ContactViewController,
    EmptyState,
    FormState,
)

__all__ = [
    "ALL_CATEGORIES",
    "ActionFailed",
    "ContactError",
    "ContactRepository",
    "ContactStore",
    "ContactViewController",
    "CreateFailed",
    "DeleteFailed",
    "EmptyState",
    "FetchFailed",
    "FormMode",
    "FormState",
    "Invalid",
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
