"""Transient UI state over the contact list: filters, entry form, edit target."""

import asyncio
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any

from contactbook.application.contact_repository import ContactRepository
from contactbook.application.dto import (
    ActionFailed,
    FormMode,
    Invalid,
    SaveFailed,
    Saved,
)
from contactbook.application.errors import ContactError, CreateFailed, UpdateFailed
from contactbook.application.filtering import (
    ALL_CATEGORIES,
    derive_view,
    parse_category_filter,
)
from contactbook.domain import Category, Contact, ContactFields

logger = logging.getLogger(__name__)


class FormState(str, Enum):
    CLOSED = "closed"
    ADDING = "adding"
    EDITING = "editing"


class EmptyState(str, Enum):
    NO_CONTACTS = "no_contacts"
    NO_MATCHES = "no_matches"


_FORM_KEYS = ("name", "email", "phone", "company", "category", "avatar", "favorite")


class ContactViewController:
    """Holds search/filter/favorites selections and the entry form; dispatches intents to the repository.

    Never holds authoritative contact data: the list shown is always derived
    from the repository's projection.
    """

    def __init__(self, repository: ContactRepository) -> None:
        self._repo = repository
        self.search_term = ""
        self._category_filter: str | Category = ALL_CATEGORIES
        self.favorites_only = False
        self._form = FormState.CLOSED
        self._editing: Contact | None = None
        self._draft: ContactFields | None = None

    # --- filters ---

    @property
    def category_filter(self) -> str | Category:
        return self._category_filter

    @category_filter.setter
    def category_filter(self, value: str | Category | None) -> None:
        self._category_filter = parse_category_filter(value)

    def visible(self, contacts: list[Contact] | None = None) -> list[Contact]:
        """Derived view over the given contacts, or the repository projection."""
        if contacts is None:
            contacts = self._repo.projection
        return derive_view(
            contacts, self.search_term, self._category_filter, self.favorites_only
        )

    def empty_state(
        self, contacts: list[Contact], visible: list[Contact]
    ) -> EmptyState | None:
        if visible:
            return None
        return EmptyState.NO_MATCHES if contacts else EmptyState.NO_CONTACTS

    # --- entry form ---

    @property
    def form(self) -> FormState:
        return self._form

    @property
    def editing(self) -> Contact | None:
        return self._editing

    @property
    def mode(self) -> FormMode:
        return FormMode.EDIT if self._editing is not None else FormMode.ADD

    def begin_add(self) -> None:
        self._editing = None
        self._draft = None
        self._form = FormState.ADDING

    def begin_edit(self, contact: Contact) -> None:
        self._editing = contact
        self._draft = None
        self._form = FormState.EDITING

    def initial_fields(self) -> ContactFields | None:
        """Values to prefill the form with: a reopened draft, the edit target, or nothing."""
        if self._draft is not None:
            return self._draft
        if self._editing is not None:
            return self._editing.fields()
        return None

    def cancel(self) -> None:
        self._close()

    async def submit(
        self, data: Mapping[str, Any] | ContactFields
    ) -> Saved | SaveFailed | Invalid:
        """Validate, dispatch create or update, close the form, then await the outcome.

        The form is closed as soon as the request is dispatched. A failure does
        not reopen it; pass the SaveFailed to reopen() to do so.
        """
        if self._form is FormState.CLOSED:
            raise RuntimeError("Entry form is not open.")
        try:
            fields = self._build_fields(data)
        except ValueError as exc:
            return Invalid(reason=str(exc))

        target = self._editing
        mode = self.mode
        if target is None:
            pending = asyncio.ensure_future(self._repo.create(fields))
        else:
            pending = asyncio.ensure_future(self._repo.update(target.id, fields))
        self._close()

        try:
            contact = await pending
        except (CreateFailed, UpdateFailed) as exc:
            logger.warning("Saving contact failed (%s): %s", mode.value, exc)
            return SaveFailed(error=exc, mode=mode, fields=fields, target=target)
        return Saved(contact=contact, mode=mode)

    def reopen(self, failure: SaveFailed) -> None:
        """Reopen the form with the fields of a failed save."""
        self._editing = failure.target
        self._draft = failure.fields
        self._form = FormState.EDITING if failure.target else FormState.ADDING

    # --- list actions ---

    async def toggle_favorite(self, contact_id: str) -> Contact | ActionFailed:
        try:
            return await self._repo.toggle_favorite(contact_id)
        except ContactError as exc:
            return ActionFailed(error=exc, contact_id=contact_id)

    async def delete(self, contact_id: str) -> str | ActionFailed:
        try:
            return await self._repo.delete(contact_id)
        except ContactError as exc:
            return ActionFailed(error=exc, contact_id=contact_id)

    def _build_fields(self, data: Mapping[str, Any] | ContactFields) -> ContactFields:
        if isinstance(data, ContactFields):
            return data
        values: dict[str, Any] = {}
        base = self.initial_fields()
        if base is not None:
            # Fields the form does not show (avatar, favorite) keep their current value.
            values = {key: getattr(base, key) for key in _FORM_KEYS}
        values.update({key: data[key] for key in _FORM_KEYS if key in data})
        return ContactFields(**values)

    def _close(self) -> None:
        self._form = FormState.CLOSED
        self._editing = None
        self._draft = None
