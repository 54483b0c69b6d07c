"""Person and group use cases: validated writes, furigana fill, index sections."""

import logging
from dataclasses import replace

from relnet.application.dto import (
    Deleted,
    GroupSaved,
    IndexSection,
    Invalid,
    PersonSaved,
)
from relnet.application.ports import PersonRepository, Transliterator
from relnet.application.validation import GroupInputValidator, PersonInputValidator
from relnet.domain import Group, Person, PersonNameInput, classify
from relnet.domain.name_index import group_into_sections
from relnet.domain.unicode_script import contains_japanese_script

logger = logging.getLogger(__name__)


class PersonService:
    """Front door to the data service for one signed-in user."""

    def __init__(
        self,
        repository: PersonRepository,
        *,
        transliterator: Transliterator | None = None,
    ) -> None:
        self._repo = repository
        self._transliterator = transliterator
        self._person_validator = PersonInputValidator()
        self._group_validator = GroupInputValidator()

    # --- persons ---

    def add_person(self, person: Person) -> PersonSaved | Invalid:
        reason = self._person_validator.validate_person(person)
        if reason:
            return Invalid(reason=reason)
        stored = self._repo.add_person(self.fill_furigana(person))
        logger.info("Added person %s", stored.id)
        return PersonSaved(person=stored)

    def update_person(self, person: Person) -> PersonSaved | Invalid:
        """Overwrite a stored person. NotFoundId propagates when person.id is missing."""
        reason = self._person_validator.validate_person(person)
        if reason:
            return Invalid(reason=reason)
        stored = self._repo.update_person(self.fill_furigana(person))
        return PersonSaved(person=stored)

    def delete_person(self, person_id: str) -> Deleted:
        return Deleted(id=self._repo.delete_person(person_id))

    def list_persons(self) -> list[Person]:
        return self._repo.list_persons()

    def persons_in_group(self, group_id: str) -> list[Person]:
        return [p for p in self._repo.list_persons() if group_id in p.group_ids]

    def person_sections(self, persons: list[Person] | None = None) -> list[IndexSection]:
        """Group persons (all stored ones by default) into sorted jump-list sections."""
        if persons is None:
            persons = self._repo.list_persons()
        return [
            IndexSection(title=title, persons=members)
            for title, members in group_into_sections(persons, lambda p: p.index_section)
        ]

    def fill_furigana(self, person: Person) -> Person:
        """Set missing furigana from the transliterator for names with Japanese script."""
        if self._transliterator is None:
            return person
        updates = {}
        for name_field, furigana_field in (
            ("last_name", "last_name_furigana"),
            ("first_name", "first_name_furigana"),
        ):
            name = getattr(person, name_field)
            if getattr(person, furigana_field) or not contains_japanese_script(name):
                continue
            reading = self._transliterator.transliterate_to_katakana(name)
            if reading and reading != name:
                updates[furigana_field] = reading
        return replace(person, **updates) if updates else person

    def classify(self, name: PersonNameInput, *, strict_symbols: bool = False) -> str:
        return classify(name, strict_symbols=strict_symbols)

    # --- groups ---

    def add_group(self, group: Group) -> GroupSaved | Invalid:
        reason = self._group_validator.validate_group(group)
        if reason:
            return Invalid(reason=reason)
        stored = self._repo.add_group(group)
        logger.info("Added group %s", stored.id)
        return GroupSaved(group=stored)

    def update_group(self, group: Group) -> GroupSaved | Invalid:
        reason = self._group_validator.validate_group(group)
        if reason:
            return Invalid(reason=reason)
        return GroupSaved(group=self._repo.update_group(group))

    def delete_group(self, group_id: str) -> Deleted:
        """Delete a group and drop it from every member's group_ids."""
        for person in self.persons_in_group(group_id):
            self._repo.update_person(person.with_group(group_id))
        return Deleted(id=self._repo.delete_group(group_id))

    def list_groups(self) -> list[Group]:
        return self._repo.list_groups()
