"""Neo4j implementation of ContactStore.
Graph: one (:Contact) node per row, properties named after the table columns.
id comes from randomUUID() and created_at from datetime(), both evaluated on the server.
"""

from neo4j.exceptions import DriverError, Neo4jError

from contactbook.application.ports import COLUMNS, RecordNotFound, Row, StoreError

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT contact_id_unique IF NOT EXISTS
FOR (c:Contact) REQUIRE c.id IS UNIQUE
"""

_SELECT_ALL_QUERY = """
MATCH (c:Contact)
RETURN properties(c) AS row
ORDER BY c.created_at DESC
"""

_INSERT_QUERY = """
CREATE (c:Contact {id: randomUUID(), created_at: datetime(), is_favorite: false})
SET c += $values
RETURN properties(c) AS row
"""

_UPDATE_QUERY = """
MATCH (c:Contact {id: $id})
SET c += $values
RETURN properties(c) AS row
"""

_DELETE_QUERY = """
MATCH (c:Contact {id: $id})
DETACH DELETE c
RETURN count(*) AS deleted
"""

_WRITABLE = tuple(c for c in COLUMNS if c not in ("id", "created_at"))


def _writable(values: Row) -> Row:
    unknown = set(values) - set(COLUMNS)
    if unknown:
        raise StoreError(f"Unknown columns: {', '.join(sorted(unknown))}")
    return {k: v for k, v in values.items() if k in _WRITABLE}


def _to_row(record) -> Row:
    row = {column: None for column in COLUMNS}
    row.update(record["row"])
    return row


async def ensure_contact_constraint(driver) -> None:
    """Create unique constraint on Contact(id) if missing."""
    async with driver.session() as session:
        await session.run(_CONSTRAINT_QUERY)


class Neo4jContactStore:
    """Stores contact rows as (:Contact) nodes. Takes an async driver (neo4j.AsyncGraphDatabase)."""

    def __init__(self, driver: object, database: str | None = None) -> None:
        self._driver = driver
        self._database = database

    def _session(self):
        if self._database:
            return self._driver.session(database=self._database)
        return self._driver.session()

    async def select_all(self) -> list[Row]:
        try:
            async with self._session() as session:
                result = await session.run(_SELECT_ALL_QUERY)
                return [_to_row(record) async for record in result]
        except (Neo4jError, DriverError) as exc:
            raise StoreError(f"select failed: {exc}") from exc

    async def insert(self, values: Row) -> Row:
        params = _writable(values)
        try:
            async with self._session() as session:
                result = await session.run(_INSERT_QUERY, values=params)
                record = await result.single()
        except (Neo4jError, DriverError) as exc:
            raise StoreError(f"insert failed: {exc}") from exc
        if record is None:
            raise StoreError("insert returned no row")
        return _to_row(record)

    async def update(self, row_id: str, values: Row) -> Row:
        params = _writable(values)
        try:
            async with self._session() as session:
                result = await session.run(_UPDATE_QUERY, id=row_id, values=params)
                record = await result.single()
        except (Neo4jError, DriverError) as exc:
            raise StoreError(f"update failed: {exc}") from exc
        if record is None:
            raise RecordNotFound(row_id)
        return _to_row(record)

    async def delete(self, row_id: str) -> None:
        try:
            async with self._session() as session:
                result = await session.run(_DELETE_QUERY, id=row_id)
                record = await result.single()
        except (Neo4jError, DriverError) as exc:
            raise StoreError(f"delete failed: {exc}") from exc
        if record is None or record["deleted"] == 0:
            raise RecordNotFound(row_id)
