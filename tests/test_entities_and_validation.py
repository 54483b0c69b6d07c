"""Tests for domain entities and form input validation."""

import pytest

from relnet.application.validation import (
    GroupInputValidator,
    InputKind,
    PersonInputValidator,
    validate,
)
from relnet.domain import AppUser, Group, Person


def test_person_display_name_priority():
    assert Person(first_name="Taro", last_name="Tanaka", nickname="Tarochan").name == "Tarochan"
    assert Person(first_name="Taro", last_name="Tanaka").name == "Taro Tanaka"
    assert Person(first_name="Taro").name == "Taro"
    assert Person(last_name="Tanaka").name == "Tanaka"
    assert Person().name == ""


def test_person_group_ids_normalized_to_tuple():
    assert Person(group_ids=["a", "b"]).group_ids == ("a", "b")


def test_with_group_toggles_membership():
    p = Person(first_name="Taro")
    p = p.with_group("g1")
    assert p.group_ids == ("g1",)
    p = p.with_group("g2").with_group("g1")
    assert p.group_ids == ("g2",)


def test_app_user_requires_uid():
    with pytest.raises(ValueError, match="uid"):
        AppUser(uid="  ")


def test_validate_ranges():
    assert validate("a", InputKind.NAME) is None
    assert validate("a" * 100, InputKind.NAME) is None
    assert validate("", InputKind.NAME) == "1文字以上100文字以下で入力してください"
    assert validate(None, InputKind.NAME) is not None
    assert validate("a" * 101, InputKind.NAME) is not None
    assert validate(None, InputKind.OTHER) is None
    assert validate("a" * 1000, InputKind.OTHER) is None
    assert validate("a" * 1001, InputKind.OTHER) == "1000文字以下で入力してください"


def test_person_validator():
    v = PersonInputValidator()
    assert v.is_valid_person(Person(nickname="Nick"))
    assert not v.is_valid_person(Person())
    assert not v.is_valid_person(Person(first_name="Taro", address="x" * 1001))


def test_group_validator():
    v = GroupInputValidator()
    assert v.is_valid_group(Group(name="Family"))
    assert not v.is_valid_group(Group(name=""))
    assert v.validate_group(Group(name="Family", description="x" * 1001)).startswith("description")
