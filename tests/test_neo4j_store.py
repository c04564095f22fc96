"""Integration tests for Neo4jContactStore. Require Docker
(testcontainers); skipped when no container can be started."""

import pytest
import pytest_asyncio
from neo4j import AsyncGraphDatabase

from contactbook.application import ContactRepository, RecordNotFound, UpdateFailed
from contactbook.domain import Category, ContactFields
from contactbook.infrastructure import Neo4jContactStore, ensure_contact_constraint


@pytest.fixture(scope="session")
def neo4j_container():
    from testcontainers.neo4j import Neo4jContainer

    try:
        container = Neo4jContainer()
        container.start()
    except Exception as exc:  # noqa: BLE001
        pytest.skip(f"Neo4j container unavailable: {exc}")
    try:
        yield container
    finally:
        container.stop()


@pytest_asyncio.fixture
async def driver(neo4j_container):
    drv = AsyncGraphDatabase.driver(
        neo4j_container.get_connection_url(),
        auth=(neo4j_container.username, neo4j_container.password),
    )
    async with drv.session() as session:
        await session.run("MATCH (n) DETACH DELETE n")
    await ensure_contact_constraint(drv)
    try:
        yield drv
    finally:
        await drv.close()


@pytest.mark.asyncio
async def test_insert_assigns_id_and_created_at(driver):
    store = Neo4jContactStore(driver)
    row = await store.insert({"name": "Alice", "email": "a@x.com", "category": "work"})
    assert row["id"]
    assert row["created_at"] is not None
    assert row["is_favorite"] is False
    assert row["phone"] is None


@pytest.mark.asyncio
async def test_select_all_newest_first(driver):
    store = Neo4jContactStore(driver)
    first = await store.insert({"name": "First", "email": "f@x"})
    second = await store.insert({"name": "Second", "email": "s@x"})
    rows = await store.select_all()
    assert [r["id"] for r in rows] == [second["id"], first["id"]]


@pytest.mark.asyncio
async def test_update_is_partial_and_unknown_id_raises(driver):
    store = Neo4jContactStore(driver)
    row = await store.insert({"name": "Bob", "email": "b@x", "company": "Acme"})
    updated = await store.update(row["id"], {"is_favorite": True})
    assert updated["is_favorite"] is True
    assert updated["company"] == "Acme"
    assert updated["created_at"] == row["created_at"]

    cleared = await store.update(row["id"], {"company": None})
    assert cleared["company"] is None

    with pytest.raises(RecordNotFound):
        await store.update("missing", {"name": "X"})


@pytest.mark.asyncio
async def test_delete(driver):
    store = Neo4jContactStore(driver)
    row = await store.insert({"name": "Carol", "email": "c@x"})
    await store.delete(row["id"])
    assert await store.select_all() == []
    with pytest.raises(RecordNotFound):
        await store.delete(row["id"])


@pytest.mark.asyncio
async def test_repository_round_trip(driver):
    repo = ContactRepository(Neo4jContactStore(driver))
    fields = ContactFields(name="Dave", email="d@x", phone="+12025554444",
                           category=Category.FAMILY)
    created = await repo.create(fields)
    listed = await repo.list_all()
    assert [c.id for c in listed] == [created.id]
    assert listed[0].fields() == fields
    assert listed[0].created_at.tzinfo is not None

    toggled = await repo.toggle_favorite(created.id)
    assert toggled.favorite is True
    assert toggled.created_at == created.created_at

    with pytest.raises(UpdateFailed):
        await repo.update("missing", fields)
