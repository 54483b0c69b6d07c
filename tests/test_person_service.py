"""Unit tests for PersonService. In-memory repo and a fake transliterator only."""

import pytest

from relnet.application import (
    Deleted,
    GroupSaved,
    Invalid,
    NotFoundId,
    NotFoundUser,
    PersonSaved,
    PersonService,
)
from relnet.domain import OTHER_BUCKET, AppUser, Group, Person, PersonNameInput
from relnet.infrastructure import InMemoryPersonRepository, StaticIdentityProvider


class FakeTransliterator:
    def __init__(self, readings: dict[str, str]) -> None:
        self.readings = readings
        self.calls: list[str] = []

    def transliterate_to_katakana(self, text: str) -> str:
        self.calls.append(text)
        return self.readings.get(text, text)


def _service(transliterator=None, user=AppUser(uid="user-1")) -> PersonService:
    repo = InMemoryPersonRepository(StaticIdentityProvider(user))
    return PersonService(repo, transliterator=transliterator)


def test_add_person_assigns_id_and_lists_it() -> None:
    service = _service()
    r = service.add_person(Person(first_name="Taro", last_name="Tanaka"))
    assert isinstance(r, PersonSaved)
    assert r.person.id is not None
    assert r.person.created_at is not None

    listed = service.list_persons()
    assert len(listed) == 1
    assert listed[0].name == "Taro Tanaka"


def test_add_person_without_any_name_is_invalid() -> None:
    service = _service()
    r = service.add_person(Person(notes="no name"))
    assert isinstance(r, Invalid)
    assert "name" in r.reason
    assert service.list_persons() == []


def test_add_person_with_too_long_notes_is_invalid() -> None:
    service = _service()
    r = service.add_person(Person(first_name="Taro", notes="x" * 1001))
    assert isinstance(r, Invalid)
    assert r.reason.startswith("notes")


def test_add_person_fills_missing_furigana() -> None:
    fake = FakeTransliterator({"田中": "タナカ", "太郎": "タロウ"})
    service = _service(fake)
    r = service.add_person(Person(last_name="田中", first_name="太郎"))
    assert isinstance(r, PersonSaved)
    assert r.person.last_name_furigana == "タナカ"
    assert r.person.first_name_furigana == "タロウ"
    assert r.person.index_bucket == "タ"
    assert r.person.index_section == "た"


def test_existing_furigana_is_kept() -> None:
    fake = FakeTransliterator({"田中": "タナカ"})
    service = _service(fake)
    r = service.add_person(Person(last_name="田中", last_name_furigana="でんなか"))
    assert isinstance(r, PersonSaved)
    assert r.person.last_name_furigana == "でんなか"
    assert fake.calls == []


def test_latin_names_are_not_sent_to_transliterator() -> None:
    fake = FakeTransliterator({})
    service = _service(fake)
    r = service.add_person(Person(last_name="Tanaka"))
    assert isinstance(r, PersonSaved)
    assert r.person.last_name_furigana is None
    assert fake.calls == []


def test_unreadable_kanji_leaves_furigana_empty() -> None:
    service = _service(FakeTransliterator({}))
    r = service.add_person(Person(last_name="田中"))
    assert isinstance(r, PersonSaved)
    assert r.person.last_name_furigana is None
    assert r.person.index_bucket == OTHER_BUCKET


def test_update_person_overwrites() -> None:
    service = _service()
    created = service.add_person(Person(first_name="Taro"))
    assert isinstance(created, PersonSaved)
    updated = service.update_person(Person(id=created.person.id, first_name="Jiro"))
    assert isinstance(updated, PersonSaved)
    assert updated.person.updated_at is not None
    assert [p.first_name for p in service.list_persons()] == ["Jiro"]


def test_update_person_without_id_raises() -> None:
    service = _service()
    with pytest.raises(NotFoundId):
        service.update_person(Person(first_name="Taro"))


def test_delete_person() -> None:
    service = _service()
    created = service.add_person(Person(first_name="Taro"))
    r = service.delete_person(created.person.id)
    assert r == Deleted(id=created.person.id)
    assert service.list_persons() == []


def test_person_sections_sorted_hiragana_first_other_last() -> None:
    service = _service()
    for person in (
        Person(last_name="Tanaka"),
        Person(last_name="田中"),
        Person(last_name="やまだ"),
        Person(last_name="Abe"),
        Person(last_name="いとう"),
    ):
        service.add_person(person)

    sections = service.person_sections()
    assert [s.title for s in sections] == ["あ", "や", "A", "T", OTHER_BUCKET]
    assert sections[-1].persons[0].last_name == "田中"


def test_group_lifecycle_and_membership() -> None:
    service = _service()
    g = service.add_group(Group(name="Friends"))
    assert isinstance(g, GroupSaved)
    group_id = g.group.id

    member = service.add_person(Person(first_name="Taro", group_ids=(group_id,)))
    service.add_person(Person(first_name="Hanako"))
    assert [p.first_name for p in service.persons_in_group(group_id)] == ["Taro"]

    renamed = service.update_group(Group(id=group_id, name="Best friends"))
    assert isinstance(renamed, GroupSaved)
    assert [x.name for x in service.list_groups()] == ["Best friends"]

    service.delete_group(group_id)
    assert service.list_groups() == []
    remaining = {p.id: p for p in service.list_persons()}
    assert remaining[member.person.id].group_ids == ()


def test_add_group_with_empty_name_is_invalid() -> None:
    service = _service()
    assert isinstance(service.add_group(Group(name="")), Invalid)


def test_no_signed_in_user_raises() -> None:
    service = _service(user=None)
    with pytest.raises(NotFoundUser):
        service.list_persons()


def test_classify_does_not_touch_repository() -> None:
    service = _service(user=None)
    assert service.classify(PersonNameInput(nickname="!Taro")) == "!"
    assert service.classify(PersonNameInput(nickname="!Taro"), strict_symbols=True) == OTHER_BUCKET
