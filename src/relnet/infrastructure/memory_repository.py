"""In-memory implementation of PersonRepository (no DB)."""

import queue
import threading
import uuid
from collections.abc import Iterator
from dataclasses import replace
from datetime import datetime, timezone

from relnet.application.errors import NotFoundId, NotFoundUser
from relnet.application.ports import IdentityProvider
from relnet.domain import Group, Person


def _now() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryPersonRepository:
    """Stores persons and groups in memory, keyed by the current user's uid.
    Watchers get a full sorted snapshot through their own queue after every write.
    """

    def __init__(self, identity: IdentityProvider) -> None:
        self._identity = identity
        self._lock = threading.Lock()
        self._persons: dict[str, dict[str, Person]] = {}
        self._groups: dict[str, dict[str, Group]] = {}
        self._person_watchers: dict[str, list[queue.Queue]] = {}
        self._group_watchers: dict[str, list[queue.Queue]] = {}

    def _user_id(self) -> str:
        user = self._identity.current_user()
        if user is None:
            raise NotFoundUser()
        return user.uid

    def _sorted_persons(self, uid: str) -> list[Person]:
        return sorted(self._persons.get(uid, {}).values(), key=lambda p: p.name)

    def _sorted_groups(self, uid: str) -> list[Group]:
        return sorted(self._groups.get(uid, {}).values(), key=lambda g: g.name)

    def _notify_persons(self, uid: str) -> None:
        # Caller holds the lock.
        snapshot = self._sorted_persons(uid)
        for q in self._person_watchers.get(uid, []):
            q.put(snapshot)

    def _notify_groups(self, uid: str) -> None:
        snapshot = self._sorted_groups(uid)
        for q in self._group_watchers.get(uid, []):
            q.put(snapshot)

    # --- reads ---

    def list_groups(self) -> list[Group]:
        uid = self._user_id()
        with self._lock:
            return self._sorted_groups(uid)

    def list_persons(self) -> list[Person]:
        uid = self._user_id()
        with self._lock:
            return self._sorted_persons(uid)

    # --- writes ---

    def add_group(self, group: Group) -> Group:
        uid = self._user_id()
        stored = replace(group, id=str(uuid.uuid4()), created_at=_now())
        with self._lock:
            self._groups.setdefault(uid, {})[stored.id] = stored
            self._notify_groups(uid)
        return stored

    def add_person(self, person: Person) -> Person:
        uid = self._user_id()
        stored = replace(person, id=str(uuid.uuid4()), created_at=_now())
        with self._lock:
            self._persons.setdefault(uid, {})[stored.id] = stored
            self._notify_persons(uid)
        return stored

    def update_group(self, group: Group) -> Group:
        uid = self._user_id()
        if group.id is None:
            raise NotFoundId()
        with self._lock:
            groups = self._groups.get(uid, {})
            if group.id not in groups:
                raise NotFoundId(group.id)
            stored = replace(group, created_at=groups[group.id].created_at, updated_at=_now())
            groups[group.id] = stored
            self._notify_groups(uid)
        return stored

    def update_person(self, person: Person) -> Person:
        uid = self._user_id()
        if person.id is None:
            raise NotFoundId()
        with self._lock:
            persons = self._persons.get(uid, {})
            if person.id not in persons:
                raise NotFoundId(person.id)
            stored = replace(person, created_at=persons[person.id].created_at, updated_at=_now())
            persons[person.id] = stored
            self._notify_persons(uid)
        return stored

    def delete_group(self, group_id: str) -> str:
        uid = self._user_id()
        with self._lock:
            if self._groups.get(uid, {}).pop(group_id, None) is not None:
                self._notify_groups(uid)
        return group_id

    def delete_person(self, person_id: str) -> str:
        uid = self._user_id()
        with self._lock:
            if self._persons.get(uid, {}).pop(person_id, None) is not None:
                self._notify_persons(uid)
        return person_id

    # --- watches ---

    def watch_groups(self) -> Iterator[list[Group]]:
        uid = self._user_id()
        return self._watch(uid, self._group_watchers, self._sorted_groups)

    def watch_persons(self) -> Iterator[list[Person]]:
        uid = self._user_id()
        return self._watch(uid, self._person_watchers, self._sorted_persons)

    def _watch(self, uid, watchers, snapshot):
        q: queue.Queue = queue.Queue()
        with self._lock:
            watchers.setdefault(uid, []).append(q)
            initial = snapshot(uid)
        try:
            yield initial
            while True:
                yield q.get()
        finally:
            with self._lock:
                watchers[uid].remove(q)
