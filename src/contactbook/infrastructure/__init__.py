"""Infrastructure layer: concrete implementations of application ports."""

from contactbook.infrastructure.memory_store import InMemoryContactStore
from contactbook.infrastructure.notifications import LoggingNotifier
from contactbook.infrastructure.persistence.neo4j_store import (
    Neo4jContactStore,
    ensure_contact_constraint,
)

__all__ = [
    "InMemoryContactStore",
    "LoggingNotifier",
    "Neo4jContactStore",
    "ensure_contact_constraint",
]
