"""Length validation for person and group form input."""

from enum import Enum

from relnet.domain import Group, Person
from relnet.domain.entities import NAME_MAX_LENGTH, OTHER_MAX_LENGTH


class InputKind(Enum):
    NAME = "name"
    OTHER = "other"

    @property
    def valid_range(self) -> range:
        if self is InputKind.NAME:
            return range(1, NAME_MAX_LENGTH + 1)
        return range(0, OTHER_MAX_LENGTH + 1)

    @property
    def message(self) -> str:
        r = self.valid_range
        if self is InputKind.NAME:
            return f"{r.start}文字以上{r.stop - 1}文字以下で入力してください"
        return f"{r.stop - 1}文字以下で入力してください"


def validate(value: str | None, kind: InputKind) -> str | None:
    """Return None if value fits kind, else the reason it does not."""
    if len(value or "") in kind.valid_range:
        return None
    return kind.message


class PersonInputValidator:
    def validate_person(self, person: Person) -> str | None:
        """Return the first failing field's reason, or None."""
        reason = validate(person.name, InputKind.NAME)
        if reason:
            return f"name: {reason}"
        others = {
            "nickname": person.nickname,
            "last_name_furigana": person.last_name_furigana,
            "first_name_furigana": person.first_name_furigana,
            "notes": person.notes,
            "address": person.address,
        }
        for field_name, value in others.items():
            reason = validate(value, InputKind.OTHER)
            if reason:
                return f"{field_name}: {reason}"
        return None

    def is_valid_person(self, person: Person) -> bool:
        return self.validate_person(person) is None


class GroupInputValidator:
    def validate_group(self, group: Group) -> str | None:
        reason = validate(group.name, InputKind.NAME)
        if reason:
            return f"name: {reason}"
        reason = validate(group.description, InputKind.OTHER)
        if reason:
            return f"description: {reason}"
        return None

    def is_valid_group(self, group: Group) -> bool:
        return self.validate_group(group) is None
