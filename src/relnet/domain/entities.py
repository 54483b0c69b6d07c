"""Domain entities: Person, Group, and AppUser."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from relnet.domain.name_index import PersonNameInput, classify, index_section

# Input limits shared by the person and group forms.
NAME_MAX_LENGTH = 100
OTHER_MAX_LENGTH = 1000


@dataclass(frozen=True)
class AppUser:
    """The signed-in account. uid scopes every person and group."""

    uid: str
    email: str | None = None
    name: str | None = None
    photo_url: str | None = None

    def __post_init__(self):
        if not self.uid or not self.uid.strip():
            raise ValueError("AppUser uid must be non-empty.")


@dataclass(frozen=True)
class Group:
    """A named collection of persons. id is None until stored."""

    id: str | None = None
    name: str = ""
    description: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class Person:
    """
    Someone the user keeps track of.
    Any name field may be empty; which one is shown is decided by `name`.
    """

    id: str | None = None
    first_name: str = ""
    last_name: str = ""
    nickname: str = ""
    last_name_furigana: str | None = None
    first_name_furigana: str | None = None
    birthdate: date | None = None
    group_ids: tuple[str, ...] = field(default_factory=tuple)
    notes: str = ""
    address: str | None = None
    last_contacted: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self):
        if not isinstance(self.group_ids, tuple):
            object.__setattr__(self, "group_ids", tuple(self.group_ids))

    @property
    def name(self) -> str:
        if self.nickname:
            return self.nickname
        if self.first_name and self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name or self.last_name

    def name_input(self) -> PersonNameInput:
        return PersonNameInput(
            last_name=self.last_name,
            first_name=self.first_name,
            nickname=self.nickname,
            last_name_furigana=self.last_name_furigana,
            first_name_furigana=self.first_name_furigana,
        )

    @property
    def index_bucket(self) -> str:
        return classify(self.name_input())

    @property
    def index_section(self) -> str:
        return index_section(self.name_input())

    def with_group(self, group_id: str) -> "Person":
        """Toggle membership: add group_id if absent, remove it if present."""
        if group_id in self.group_ids:
            ids = tuple(g for g in self.group_ids if g != group_id)
        else:
            ids = self.group_ids + (group_id,)
        return replace(self, group_ids=ids)
