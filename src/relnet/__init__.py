"""
RelNet core: clean-architecture layout.

- domain: entities (Person, Group, AppUser) and the name index. No outer dependencies.
- application: use cases (PersonService), ports (PersonRepository, IdentityProvider, Transliterator), DTOs.
- infrastructure: adapters (InMemoryPersonRepository, Neo4jPersonRepository, KakasiTransliterator).
"""

from relnet.application import (
    DataServiceError,
    Deleted,
    GroupSaved,
    IndexSection,
    Invalid,
    NotFoundId,
    NotFoundUser,
    PersonRepository,
    PersonSaved,
    PersonService,
)
from relnet.domain import OTHER_BUCKET, AppUser, Group, Person, PersonNameInput, classify
from relnet.infrastructure import (
    InMemoryPersonRepository,
    KakasiTransliterator,
    Neo4jPersonRepository,
)

__all__ = [
    "AppUser",
    "DataServiceError",
    "Deleted",
    "Group",
    "GroupSaved",
    "InMemoryPersonRepository",
    "IndexSection",
    "Invalid",
    "KakasiTransliterator",
    "Neo4jPersonRepository",
    "NotFoundId",
    "NotFoundUser",
    "OTHER_BUCKET",
    "Person",
    "PersonNameInput",
    "PersonRepository",
    "PersonSaved",
    "PersonService",
    "classify",
]
