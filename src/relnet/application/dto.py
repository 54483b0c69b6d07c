"""Result types returned by PersonService."""

from dataclasses import dataclass

from relnet.domain import Group, Person


@dataclass(frozen=True)
class Invalid:
    reason: str


@dataclass(frozen=True)
class PersonSaved:
    person: Person


@dataclass(frozen=True)
class GroupSaved:
    group: Group


@dataclass(frozen=True)
class Deleted:
    id: str


@dataclass(frozen=True)
class IndexSection:
    """One jump-list section: its title and the persons filed under it."""

    title: str
    persons: list[Person]
