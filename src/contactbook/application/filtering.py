"""Derived view: search, category and favorites filters over a contact list."""

from collections.abc import Iterable

from contactbook.domain import Category, Contact

ALL_CATEGORIES = "all"


def parse_category_filter(value: str | Category | None) -> str | Category:
    """Return "all" or a Category. Raises ValueError for anything else."""
    if value is None or value == ALL_CATEGORIES or value == "":
        return ALL_CATEGORIES
    return Category(value)


def matches_search(contact: Contact, search_term: str) -> bool:
    """Case-insensitive substring match on name, email or company. An empty term matches all."""
    needle = (search_term or "").lower()
    if not needle:
        return True
    return any(
        needle in (value or "").lower()
        for value in (contact.name, contact.email, contact.company)
    )


def derive_view(
    contacts: Iterable[Contact],
    search_term: str = "",
    category_filter: str | Category = ALL_CATEGORIES,
    favorites_only: bool = False,
) -> list[Contact]:
    """Return the contacts passing all three filters, in their original order."""
    return [
        contact
        for contact in contacts
        if matches_search(contact, search_term)
        and (category_filter == ALL_CATEGORIES or contact.category == category_filter)
        and (not favorites_only or contact.favorite)
    ]
