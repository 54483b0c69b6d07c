"""Application ports (interfaces). Implemented by infrastructure adapters."""

from collections.abc import Iterator
from typing import Protocol

from relnet.domain import AppUser, Group, Person


class PersonRepository(Protocol):
    """Stores the signed-in user's persons and groups.

    Every call raises NotFoundUser when nobody is signed in.
    """

    def list_groups(self) -> list[Group]:
        """Return all groups sorted by name."""
        ...

    def list_persons(self) -> list[Person]:
        """Return all persons sorted by display name."""
        ...

    def add_group(self, group: Group) -> Group:
        """Store a new group. Returns it with id and created_at set."""
        ...

    def add_person(self, person: Person) -> Person:
        """Store a new person. Returns it with id and created_at set."""
        ...

    def update_group(self, group: Group) -> Group:
        """Overwrite a stored group. Raises NotFoundId if group.id is None or unknown."""
        ...

    def update_person(self, person: Person) -> Person:
        """Overwrite a stored person. Raises NotFoundId if person.id is None or unknown."""
        ...

    def delete_group(self, group_id: str) -> str:
        """Delete a group and return its id."""
        ...

    def delete_person(self, person_id: str) -> str:
        """Delete a person and return its id."""
        ...

    def watch_groups(self) -> Iterator[list[Group]]:
        """Yield the full group list now and after every change, until closed."""
        ...

    def watch_persons(self) -> Iterator[list[Person]]:
        """Yield the full person list now and after every change, until closed."""
        ...


class IdentityProvider(Protocol):
    def current_user(self) -> AppUser | None:
        """Return the signed-in user, or None."""
        ...


class Transliterator(Protocol):
    def transliterate_to_katakana(self, text: str) -> str:
        """Return the katakana reading of text, or text unchanged if it has none."""
        ...
