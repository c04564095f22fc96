"""
FastAPI backend: REST API over the contact list.
Run with uvicorn: uvicorn api.main:app --reload
"""

import io
import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from repo root (when run from repo root or from Docker)
for path in (
    Path(__file__).resolve().parent.parent.parent / ".env",
    Path.cwd() / ".env",
):
    if path.exists():
        load_dotenv(path)
        break

from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response
from neo4j import AsyncGraphDatabase
from pydantic import BaseModel

from contactbook.application import (
    ContactError,
    ContactRepository,
    ContactStore,
    ContactViewController,
    FetchFailed,
    NotFound,
    RecordNotFound,
)
from contactbook.application.export import contacts_to_csv, write_spreadsheet
from contactbook.domain import DEFAULT_CATEGORY, Contact, ContactFields
from contactbook.infrastructure import (
    InMemoryContactStore,
    LoggingNotifier,
    Neo4jContactStore,
    ensure_contact_constraint,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

BACKEND_NEO4J = "neo4j"
BACKEND_MEMORY = "memory"
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return AsyncGraphDatabase.driver(uri, auth=(user, password))


def _backend() -> str:
    backend = os.environ.get("CONTACTS_BACKEND", BACKEND_NEO4J).strip().lower()
    if backend not in (BACKEND_NEO4J, BACKEND_MEMORY):
        raise ValueError(f"Unknown CONTACTS_BACKEND: {backend!r}")
    return backend


# --- request / response bodies ---


class ContactBody(BaseModel):
    """Create/update payload. On update, a missing is_favorite keeps the stored flag."""

    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    category: str = DEFAULT_CATEGORY.value
    avatar: str | None = None
    is_favorite: bool | None = None


class FavoriteBody(BaseModel):
    favorite: bool


class ContactItem(BaseModel):
    id: str
    name: str
    email: str
    phone: str | None = None
    company: str | None = None
    category: str
    avatar: str | None = None
    is_favorite: bool
    created_at: str
    initials: str


def _to_item(contact: Contact) -> ContactItem:
    return ContactItem(
        id=contact.id,
        name=contact.name,
        email=contact.email,
        phone=contact.phone,
        company=contact.company,
        category=contact.category.value,
        avatar=contact.avatar,
        is_favorite=contact.favorite,
        created_at=contact.created_at.isoformat(),
        initials=contact.initials,
    )


def _to_fields(body: ContactBody, favorite: bool = False) -> ContactFields:
    try:
        return ContactFields(
            name=body.name,
            email=body.email,
            phone=body.phone,
            company=body.company,
            category=body.category,
            avatar=body.avatar,
            favorite=body.is_favorite if body.is_favorite is not None else favorite,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


def _http_error(exc: ContactError) -> HTTPException:
    if isinstance(exc, NotFound) or isinstance(exc.__cause__, RecordNotFound):
        return HTTPException(status_code=404, detail="Contact not found")
    if isinstance(exc, FetchFailed):
        return HTTPException(status_code=503, detail=str(exc))
    return HTTPException(status_code=502, detail=str(exc))


def get_repository(request: Request) -> ContactRepository:
    return request.app.state.repository


def create_app(store: ContactStore | None = None) -> FastAPI:
    """Build the API. Pass a store to skip environment-driven backend selection."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.driver = None
        contact_store = store
        try:
            if contact_store is None:
                if _backend() == BACKEND_MEMORY:
                    contact_store = InMemoryContactStore()
                else:
                    app.state.driver = _get_driver()
                    await ensure_contact_constraint(app.state.driver)
                    contact_store = Neo4jContactStore(app.state.driver)
            logger.info("Contact store: %s", type(contact_store).__name__)
            app.state.repository = ContactRepository(contact_store, LoggingNotifier())
            yield
        finally:
            if getattr(app.state, "driver", None) is not None:
                await app.state.driver.close()

    app = FastAPI(title="Contactbook API", lifespan=lifespan)

    # --- REST: health ---

    @app.get("/health")
    def health():
        return {"status": "ok"}

    # --- REST: contacts ---

    @app.get("/contacts")
    async def list_contacts(
        request: Request,
        q: str = "",
        category: str = "all",
        favorites: bool = False,
    ):
        repo = get_repository(request)
        view = ContactViewController(repo)
        view.search_term = q
        view.favorites_only = favorites
        try:
            view.category_filter = category
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        try:
            contacts = await repo.list_all()
        except ContactError as exc:
            raise _http_error(exc) from exc
        return [_to_item(c) for c in view.visible(contacts)]

    @app.get("/contacts/export.csv")
    async def export_csv(request: Request):
        try:
            contacts = await get_repository(request).list_all()
        except ContactError as exc:
            raise _http_error(exc) from exc
        return Response(
            content=contacts_to_csv(contacts),
            media_type="text/csv; charset=utf-8",
            headers={"Content-Disposition": 'attachment; filename="contacts.csv"'},
        )

    @app.get("/contacts/export.xlsx")
    async def export_xlsx(request: Request):
        try:
            contacts = await get_repository(request).list_all()
        except ContactError as exc:
            raise _http_error(exc) from exc
        buffer = io.BytesIO()
        write_spreadsheet(contacts, buffer)
        return Response(
            content=buffer.getvalue(),
            media_type=XLSX_MEDIA_TYPE,
            headers={"Content-Disposition": 'attachment; filename="contacts.xlsx"'},
        )

    @app.post("/contacts", status_code=201)
    async def create_contact(body: ContactBody, request: Request):
        fields = _to_fields(body)
        try:
            contact = await get_repository(request).create(fields)
        except ContactError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.put("/contacts/{contact_id}")
    async def update_contact(contact_id: str, body: ContactBody, request: Request):
        repo = get_repository(request)
        fields = _to_fields(body)
        try:
            if body.is_favorite is None:
                current = next(
                    (c for c in await repo.list_all() if c.id == contact_id), None
                )
                if current is not None:
                    fields = _to_fields(body, favorite=current.favorite)
            contact = await repo.update(contact_id, fields)
        except ContactError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.post("/contacts/{contact_id}/favorite")
    async def toggle_favorite(contact_id: str, request: Request):
        try:
            contact = await get_repository(request).toggle_favorite(contact_id)
        except ContactError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.put("/contacts/{contact_id}/favorite")
    async def set_favorite(contact_id: str, body: FavoriteBody, request: Request):
        try:
            contact = await get_repository(request).set_favorite(
                contact_id, body.favorite
            )
        except ContactError as exc:
            raise _http_error(exc) from exc
        return _to_item(contact)

    @app.delete("/contacts/{contact_id}", status_code=204)
    async def delete_contact(contact_id: str, request: Request):
        try:
            await get_repository(request).delete(contact_id)
        except ContactError as exc:
            raise _http_error(exc) from exc
        return Response(status_code=204)

    return app


app = create_app()
