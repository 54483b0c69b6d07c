"""Tests for InMemoryPersonRepository: scoping, errors and watches."""

import pytest

from relnet.application import NotFoundId, NotFoundUser
from relnet.domain import AppUser, Group, Person
from relnet.infrastructure import InMemoryPersonRepository, StaticIdentityProvider


class SwitchableIdentity:
    def __init__(self, user: AppUser | None) -> None:
        self.user = user

    def current_user(self) -> AppUser | None:
        return self.user


def test_lists_sorted_by_name():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    repo.add_person(Person(first_name="Zed"))
    repo.add_person(Person(first_name="Amy"))
    repo.add_group(Group(name="Work"))
    repo.add_group(Group(name="Family"))
    assert [p.name for p in repo.list_persons()] == ["Amy", "Zed"]
    assert [g.name for g in repo.list_groups()] == ["Family", "Work"]


def test_data_is_scoped_per_user():
    identity = SwitchableIdentity(AppUser(uid="alice"))
    repo = InMemoryPersonRepository(identity)
    repo.add_person(Person(first_name="Taro"))

    identity.user = AppUser(uid="bob")
    assert repo.list_persons() == []

    identity.user = AppUser(uid="alice")
    assert len(repo.list_persons()) == 1


def test_every_call_requires_a_user():
    repo = InMemoryPersonRepository(StaticIdentityProvider(None))
    with pytest.raises(NotFoundUser):
        repo.list_persons()
    with pytest.raises(NotFoundUser):
        repo.add_group(Group(name="x"))
    with pytest.raises(NotFoundUser):
        repo.watch_persons()


def test_update_unknown_or_missing_id_raises():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    with pytest.raises(NotFoundId):
        repo.update_person(Person(first_name="Taro"))
    with pytest.raises(NotFoundId):
        repo.update_group(Group(id="missing", name="x"))


def test_update_keeps_created_at():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    stored = repo.add_person(Person(first_name="Taro"))
    updated = repo.update_person(Person(id=stored.id, first_name="Jiro"))
    assert updated.created_at == stored.created_at
    assert updated.updated_at is not None


def test_delete_returns_id_even_when_missing():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    assert repo.delete_person("nope") == "nope"
    assert repo.delete_group("nope") == "nope"


def test_watch_persons_yields_snapshot_after_each_change():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    watch = repo.watch_persons()
    assert next(watch) == []

    taro = repo.add_person(Person(first_name="Taro"))
    assert [p.name for p in next(watch)] == ["Taro"]

    repo.add_person(Person(first_name="Amy"))
    assert [p.name for p in next(watch)] == ["Amy", "Taro"]

    repo.delete_person(taro.id)
    assert [p.name for p in next(watch)] == ["Amy"]
    watch.close()


def test_watch_groups_and_close_unsubscribes():
    repo = InMemoryPersonRepository(StaticIdentityProvider(AppUser(uid="u1")))
    watch = repo.watch_groups()
    assert next(watch) == []
    repo.add_group(Group(name="Family"))
    assert [g.name for g in next(watch)] == ["Family"]
    watch.close()
    assert repo._group_watchers["u1"] == []
    repo.add_group(Group(name="Work"))
    assert len(repo.list_groups()) == 2
