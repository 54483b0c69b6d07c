"""
FastAPI backend: REST API over persons, groups and the name index.
Run with uvicorn: uvicorn api.main:app --reload
"""

import logging
import os
from datetime import date, datetime
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

from fastapi import FastAPI, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from neo4j import GraphDatabase
from pydantic import BaseModel

from relnet.application import (
    DataServiceError,
    GroupSaved,
    Invalid,
    NotFoundId,
    NotFoundUser,
    PersonSaved,
    PersonService,
)
from relnet.domain import INDEX_TITLES, AppUser, Group, Person, PersonNameInput, classify
from relnet.infrastructure import (
    KakasiTransliterator,
    Neo4jPersonRepository,
    StaticIdentityProvider,
    ensure_identity_constraint,
    get_user,
    sign_in,
)

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)

USER_ID_HEADER = "X-User-Id"


def _get_driver():
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    return GraphDatabase.driver(uri, auth=(user, password))


def _furigana_enabled() -> bool:
    return os.environ.get("FURIGANA_ENABLED", "1").strip().lower() in ("1", "true", "yes")


def _poll_interval() -> float:
    return float(os.environ.get("WATCH_POLL_INTERVAL", "1.0"))


transliterator = KakasiTransliterator(enabled=_furigana_enabled())


def _get_cached_driver(app: FastAPI):
    if getattr(app.state, "driver", None) is None:
        app.state.driver = _get_driver()
    return app.state.driver


def _resolve_user(user_id: str | None, app: FastAPI) -> AppUser:
    uid = (user_id or "").strip()
    if not uid:
        raise HTTPException(status_code=401, detail="not found user")
    user = get_user(_get_cached_driver(app), uid)
    if user is None:
        raise HTTPException(status_code=401, detail="not found user")
    return user


def get_service(user: AppUser, app: FastAPI) -> PersonService:
    repo = Neo4jPersonRepository(
        _get_cached_driver(app),
        StaticIdentityProvider(user),
        poll_interval=_poll_interval(),
    )
    return PersonService(repo, transliterator=transliterator)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.driver = None
    try:
        app.state.driver = _get_driver()
        ensure_identity_constraint(app.state.driver)
        logger.info("Neo4j ready; furigana %s", "on" if _furigana_enabled() else "off")
        yield
    finally:
        if getattr(app.state, "driver", None) is not None:
            app.state.driver.close()


app = FastAPI(title="RelNet API", lifespan=lifespan)


@app.exception_handler(DataServiceError)
async def data_service_error_handler(request: Request, exc: DataServiceError):
    if isinstance(exc, NotFoundUser):
        status = 401
    elif isinstance(exc, NotFoundId):
        status = 404
    else:
        logger.error("Data service error on %s: %s", request.url.path, exc)
        status = 502
    return JSONResponse(status_code=status, content={"detail": str(exc)})


# --- REST: health ---


@app.get("/health")
def health():
    return {"status": "ok"}


# --- REST: auth ---


class SignInBody(BaseModel):
    provider: str
    external_id: str
    email: str | None = None
    name: str | None = None


class UserItem(BaseModel):
    uid: str
    email: str | None = None
    name: str | None = None
    photo_url: str | None = None


def _user_item(user: AppUser) -> UserItem:
    return UserItem(uid=user.uid, email=user.email, name=user.name, photo_url=user.photo_url)


@app.post("/auth/sign-in")
def auth_sign_in(body: SignInBody, request: Request):
    try:
        user, is_new = sign_in(
            _get_cached_driver(request.app),
            body.provider,
            body.external_id,
            email=body.email,
            name=body.name,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    logger.info("Signed in %s (new=%s)", user.uid, is_new)
    return JSONResponse(
        content={"user": _user_item(user).model_dump(), "is_new": is_new},
        status_code=201 if is_new else 200,
    )


@app.get("/me")
def me(request: Request, x_user_id: str | None = Header(None, alias=USER_ID_HEADER)):
    return _user_item(_resolve_user(x_user_id, request.app))


# --- REST: persons ---


class PersonBody(BaseModel):
    first_name: str = ""
    last_name: str = ""
    nickname: str = ""
    last_name_furigana: str | None = None
    first_name_furigana: str | None = None
    birthdate: date | None = None
    group_ids: list[str] = []
    notes: str = ""
    address: str | None = None
    last_contacted: datetime | None = None

    def to_person(self, person_id: str | None = None) -> Person:
        return Person(id=person_id, **self.model_dump())


class PersonItem(PersonBody):
    id: str
    name: str
    index_section: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _person_item(p: Person) -> PersonItem:
    return PersonItem(
        id=p.id,
        name=p.name,
        index_section=p.index_section,
        first_name=p.first_name,
        last_name=p.last_name,
        nickname=p.nickname,
        last_name_furigana=p.last_name_furigana,
        first_name_furigana=p.first_name_furigana,
        birthdate=p.birthdate,
        group_ids=list(p.group_ids),
        notes=p.notes,
        address=p.address,
        last_contacted=p.last_contacted,
        created_at=p.created_at,
        updated_at=p.updated_at,
    )


def _saved_person(result: PersonSaved | Invalid) -> PersonItem:
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    return _person_item(result.person)


@app.get("/persons")
def list_persons(request: Request, x_user_id: str | None = Header(None, alias=USER_ID_HEADER)):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return [_person_item(p) for p in service.list_persons()]


@app.get("/persons/sections")
def person_sections(
    request: Request,
    group_id: str | None = None,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    persons = service.persons_in_group(group_id) if group_id else None
    return [
        {"title": s.title, "persons": [_person_item(p) for p in s.persons]}
        for s in service.person_sections(persons)
    ]


@app.post("/persons", status_code=201)
def create_person(
    body: PersonBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return _saved_person(service.add_person(body.to_person()))


@app.put("/persons/{person_id}")
def update_person(
    person_id: str,
    body: PersonBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return _saved_person(service.update_person(body.to_person(person_id)))


@app.delete("/persons/{person_id}")
def delete_person(
    person_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return {"id": service.delete_person(person_id).id}


# --- REST: groups ---


class GroupBody(BaseModel):
    name: str
    description: str | None = None


class GroupItem(GroupBody):
    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


def _group_item(g: Group) -> GroupItem:
    return GroupItem(
        id=g.id,
        name=g.name,
        description=g.description,
        created_at=g.created_at,
        updated_at=g.updated_at,
    )


def _saved_group(result: GroupSaved | Invalid) -> GroupItem:
    if isinstance(result, Invalid):
        raise HTTPException(status_code=400, detail=result.reason)
    return _group_item(result.group)


@app.get("/groups")
def list_groups(request: Request, x_user_id: str | None = Header(None, alias=USER_ID_HEADER)):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return [_group_item(g) for g in service.list_groups()]


@app.post("/groups", status_code=201)
def create_group(
    body: GroupBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return _saved_group(service.add_group(Group(name=body.name, description=body.description)))


@app.put("/groups/{group_id}")
def update_group(
    group_id: str,
    body: GroupBody,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    group = Group(id=group_id, name=body.name, description=body.description)
    return _saved_group(service.update_group(group))


@app.delete("/groups/{group_id}")
def delete_group(
    group_id: str,
    request: Request,
    x_user_id: str | None = Header(None, alias=USER_ID_HEADER),
):
    service = get_service(_resolve_user(x_user_id, request.app), request.app)
    return {"id": service.delete_group(group_id).id}


# --- REST: name index (no user needed) ---


class NameBody(BaseModel):
    last_name: str = ""
    first_name: str = ""
    nickname: str = ""
    last_name_furigana: str | None = None
    first_name_furigana: str | None = None
    strict_symbols: bool = False


class TextBody(BaseModel):
    text: str


@app.post("/name-index/classify")
def classify_name(body: NameBody):
    fields = body.model_dump(exclude={"strict_symbols"})
    return {"bucket": classify(PersonNameInput(**fields), strict_symbols=body.strict_symbols)}


@app.post("/furigana")
def furigana(body: TextBody):
    return {"furigana": transliterator.transliterate_to_katakana(body.text)}


@app.get("/name-index/titles")
def index_titles():
    """Jump-list sidebar titles, in display order."""
    return {"titles": list(INDEX_TITLES)}
