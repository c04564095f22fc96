"""Unit tests for derive_view: search, category and favorites filters."""

from datetime import datetime, timedelta, timezone

import pytest

from contactbook.application.filtering import (
    ALL_CATEGORIES,
    derive_view,
    matches_search,
    parse_category_filter,
)
from contactbook.domain import Category, Contact

_T0 = datetime(2024, 1, 1, tzinfo=timezone.utc)


def _contact(cid: str, name: str, email: str, company: str | None = None,
             category: Category = Category.PERSONAL, favorite: bool = False,
             age: int = 0) -> Contact:
    return Contact(
        id=cid,
        name=name,
        email=email,
        company=company,
        category=category,
        favorite=favorite,
        created_at=_T0 - timedelta(days=age),
    )


def _sample() -> list[Contact]:
    return [
        _contact("1", "Alice Smith", "a@x.com", "Acme", Category.WORK, True, age=0),
        _contact("2", "Bob Jones", "bob@home.net", None, Category.FAMILY, False, age=1),
        _contact("3", "Carol White", "carol@acme.io", "Initech", Category.WORK, False, age=2),
        _contact("4", "Dan Brown", "dan@x.com", "Globex", Category.OTHER, True, age=3),
    ]


def test_alice_found_by_company_case_insensitive() -> None:
    contacts = [_contact("1", "Alice Smith", "a@x.com", "Acme", Category.WORK)]
    assert [c.id for c in derive_view(contacts, search_term="acme")] == ["1"]
    assert derive_view(contacts, search_term="bob") == []


def test_empty_search_returns_everything_in_order() -> None:
    contacts = _sample()
    assert derive_view(contacts) == contacts


def test_search_matches_name_email_and_company() -> None:
    contacts = _sample()
    assert [c.id for c in derive_view(contacts, search_term="JONES")] == ["2"]
    assert [c.id for c in derive_view(contacts, search_term="home.net")] == ["2"]
    # "acme" is Alice's company and part of Carol's email.
    assert [c.id for c in derive_view(contacts, search_term="acme")] == ["1", "3"]


def test_missing_company_never_matches_non_empty_term() -> None:
    bob = _sample()[1]
    assert matches_search(bob, "") is True
    assert matches_search(bob, "none") is False


def test_category_filter() -> None:
    contacts = _sample()
    assert [c.id for c in derive_view(contacts, category_filter="work")] == ["1", "3"]
    assert [c.id for c in derive_view(contacts, category_filter=Category.FAMILY)] == ["2"]
    assert derive_view(contacts, category_filter=Category.PERSONAL) == []
    assert derive_view(contacts, category_filter=ALL_CATEGORIES) == contacts


def test_work_and_favorites_only_returns_favorite_work_contact() -> None:
    fav = _contact("f", "Fave", "f@x", category=Category.WORK, favorite=True)
    plain = _contact("p", "Plain", "p@x", category=Category.WORK, favorite=False)
    result = derive_view([fav, plain], category_filter="work", favorites_only=True)
    assert result == [fav]


def test_filters_combine_conjunctively() -> None:
    contacts = _sample()
    result = derive_view(contacts, search_term="x.com", category_filter="other",
                         favorites_only=True)
    assert [c.id for c in result] == ["4"]
    for contact in result:
        assert matches_search(contact, "x.com")
        assert contact.category == "other"
        assert contact.favorite


def test_result_is_ordered_subset_and_input_untouched() -> None:
    contacts = _sample()
    snapshot = list(contacts)
    first = derive_view(contacts, search_term="o", favorites_only=False)
    second = derive_view(contacts, search_term="o", favorites_only=False)
    assert first == second
    assert contacts == snapshot
    positions = [contacts.index(c) for c in first]
    assert positions == sorted(positions)
    assert all(c in contacts for c in first)


def test_parse_category_filter() -> None:
    assert parse_category_filter(None) == ALL_CATEGORIES
    assert parse_category_filter("") == ALL_CATEGORIES
    assert parse_category_filter("all") == ALL_CATEGORIES
    assert parse_category_filter("family") is Category.FAMILY
    with pytest.raises(ValueError):
        parse_category_filter("friends")
