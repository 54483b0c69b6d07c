"""Neo4j implementation of PersonRepository.
Graph: (u:User {id: uid})-[:OWNS]->(p:Person), (u)-[:OWNS]->(g:Group).
Dates and datetimes are stored as ISO strings; group membership as a list of group ids on Person.
"""

import logging
import time
import uuid
from collections.abc import Iterator
from dataclasses import replace
from datetime import date, datetime, timezone

from neo4j.exceptions import Neo4jError

from relnet.application.errors import DataServiceError, FailedToUpdate, NotFoundId, NotFoundUser
from relnet.application.ports import IdentityProvider
from relnet.domain import Group, Person

logger = logging.getLogger(__name__)

_PERSON_FIELDS = (
    "first_name",
    "last_name",
    "nickname",
    "last_name_furigana",
    "first_name_furigana",
    "notes",
    "address",
)


def _datetime_to_iso(dt: datetime | date | None) -> str | None:
    return dt.isoformat() if dt is not None else None


def _iso_to_datetime(s: str | None) -> datetime | None:
    if not s:
        return None
    return datetime.fromisoformat(s.replace("Z", "+00:00"))


def _iso_to_date(s: str | None) -> date | None:
    return date.fromisoformat(s) if s else None


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _person_props(person: Person) -> dict:
    props = {name: getattr(person, name) for name in _PERSON_FIELDS}
    props.update(
        id=person.id,
        birthdate=_datetime_to_iso(person.birthdate),
        group_ids=list(person.group_ids),
        last_contacted=_datetime_to_iso(person.last_contacted),
        updated_at=_datetime_to_iso(person.updated_at),
    )
    return props


def _group_props(group: Group) -> dict:
    return {
        "id": group.id,
        "name": group.name,
        "description": group.description,
        "updated_at": _datetime_to_iso(group.updated_at),
    }


def _node_to_person(p) -> Person:
    return Person(
        id=p["id"],
        first_name=p.get("first_name") or "",
        last_name=p.get("last_name") or "",
        nickname=p.get("nickname") or "",
        last_name_furigana=p.get("last_name_furigana"),
        first_name_furigana=p.get("first_name_furigana"),
        birthdate=_iso_to_date(p.get("birthdate")),
        group_ids=tuple(p.get("group_ids") or ()),
        notes=p.get("notes") or "",
        address=p.get("address"),
        last_contacted=_iso_to_datetime(p.get("last_contacted")),
        created_at=_iso_to_datetime(p.get("created_at")),
        updated_at=_iso_to_datetime(p.get("updated_at")),
    )


def _node_to_group(g) -> Group:
    return Group(
        id=g["id"],
        name=g.get("name") or "",
        description=g.get("description"),
        created_at=_iso_to_datetime(g.get("created_at")),
        updated_at=_iso_to_datetime(g.get("updated_at")),
    )


class Neo4jPersonRepository:
    """Stores persons and groups in Neo4j, scoped by the current user's uid.
    Watches poll every poll_interval seconds and yield only when the snapshot changed.
    """

    def __init__(
        self,
        driver: object,
        identity: IdentityProvider,
        *,
        poll_interval: float = 1.0,
    ) -> None:
        self._driver = driver
        self._identity = identity
        self._poll_interval = poll_interval

    def _user_id(self) -> str:
        user = self._identity.current_user()
        if user is None:
            raise NotFoundUser()
        return user.uid

    # --- reads ---

    def list_groups(self) -> list[Group]:
        return self._list_groups(self._user_id())

    def list_persons(self) -> list[Person]:
        return self._list_persons(self._user_id())

    def _list_groups(self, uid: str) -> list[Group]:
        try:
            with self._driver.session() as session:
                result = session.run(
                    """
                    MATCH (:User {id: $user_id})-[:OWNS]->(g:Group)
                    RETURN g
                    ORDER BY g.name
                    """,
                    user_id=uid,
                )
                return [_node_to_group(rec["g"]) for rec in result]
        except Neo4jError as e:
            raise DataServiceError(cause=e) from e

    def _list_persons(self, uid: str) -> list[Person]:
        try:
            with self._driver.session() as session:
                result = session.run(
                    """
                    MATCH (:User {id: $user_id})-[:OWNS]->(p:Person)
                    RETURN p
                    """,
                    user_id=uid,
                )
                persons = [_node_to_person(rec["p"]) for rec in result]
        except Neo4jError as e:
            raise DataServiceError(cause=e) from e
        return sorted(persons, key=lambda p: p.name)

    # --- writes ---

    def add_group(self, group: Group) -> Group:
        uid = self._user_id()
        stored = replace(group, id=str(uuid.uuid4()), created_at=_now())
        try:
            with self._driver.session() as session:
                session.run(
                    """
                    MERGE (u:User {id: $user_id})
                    CREATE (u)-[:OWNS]->(g:Group)
                    SET g = $props, g.created_at = $created_at
                    """,
                    user_id=uid,
                    props=_group_props(stored),
                    created_at=_datetime_to_iso(stored.created_at),
                )
        except Neo4jError as e:
            raise DataServiceError(cause=e) from e
        return stored

    def add_person(self, person: Person) -> Person:
        uid = self._user_id()
        stored = replace(person, id=str(uuid.uuid4()), created_at=_now())
        try:
            with self._driver.session() as session:
                session.run(
                    """
                    MERGE (u:User {id: $user_id})
                    CREATE (u)-[:OWNS]->(p:Person)
                    SET p = $props, p.created_at = $created_at
                    """,
                    user_id=uid,
                    props=_person_props(stored),
                    created_at=_datetime_to_iso(stored.created_at),
                )
        except Neo4jError as e:
            raise DataServiceError(cause=e) from e
        return stored

    def update_group(self, group: Group) -> Group:
        uid = self._user_id()
        if group.id is None:
            raise NotFoundId()
        updated = replace(group, updated_at=_now())
        record = self._update(
            """
            MATCH (:User {id: $user_id})-[:OWNS]->(g:Group {id: $id})
            SET g += $props
            RETURN g AS node
            """,
            uid,
            updated.id,
            _group_props(updated),
        )
        return _node_to_group(record["node"])

    def update_person(self, person: Person) -> Person:
        uid = self._user_id()
        if person.id is None:
            raise NotFoundId()
        updated = replace(person, updated_at=_now())
        record = self._update(
            """
            MATCH (:User {id: $user_id})-[:OWNS]->(p:Person {id: $id})
            SET p += $props
            RETURN p AS node
            """,
            uid,
            updated.id,
            _person_props(updated),
        )
        return _node_to_person(record["node"])

    def _update(self, query: str, uid: str, record_id: str, props: dict):
        try:
            with self._driver.session() as session:
                record = session.run(query, user_id=uid, id=record_id, props=props).single()
        except Neo4jError as e:
            raise FailedToUpdate(e) from e
        if record is None:
            raise NotFoundId(record_id)
        return record

    def delete_group(self, group_id: str) -> str:
        self._delete("Group", group_id)
        return group_id

    def delete_person(self, person_id: str) -> str:
        self._delete("Person", person_id)
        return person_id

    def _delete(self, label: str, record_id: str) -> None:
        uid = self._user_id()
        try:
            with self._driver.session() as session:
                session.run(
                    f"""
                    MATCH (:User {{id: $user_id}})-[:OWNS]->(n:{label} {{id: $id}})
                    DETACH DELETE n
                    """,
                    user_id=uid,
                    id=record_id,
                )
        except Neo4jError as e:
            raise DataServiceError(cause=e) from e

    # --- watches ---

    def watch_groups(self) -> Iterator[list[Group]]:
        uid = self._user_id()
        return self._poll(lambda: self._list_groups(uid))

    def watch_persons(self) -> Iterator[list[Person]]:
        uid = self._user_id()
        return self._poll(lambda: self._list_persons(uid))

    def _poll(self, load):
        last = load()
        yield last
        while True:
            time.sleep(self._poll_interval)
            current = load()
            if current != last:
                logger.debug("Snapshot changed (%d records)", len(current))
                last = current
                yield current
