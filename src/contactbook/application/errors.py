"""Errors raised by ContactRepository. None of them is retried."""


class ContactError(Exception):
    """Base class for failed contact operations."""

    def __init__(self, message: str, contact_id: str | None = None) -> None:
        super().__init__(message)
        self.contact_id = contact_id


class FetchFailed(ContactError):
    """The contact list could not be loaded. The list is unavailable, not empty."""


class CreateFailed(ContactError):
    pass


class UpdateFailed(ContactError):
    pass


class DeleteFailed(ContactError):
    pass


class ToggleFailed(ContactError):
    pass


class NotFound(ContactError):
    """The id is not in the local projection of the contact list."""
