"""Domain layer: entities and the name index. No dependencies on outer layers."""

from relnet.domain.entities import AppUser, Group, Person
from relnet.domain.name_index import (
    INDEX_TITLES,
    OTHER_BUCKET,
    PersonNameInput,
    classify,
    index_section,
)

__all__ = [
    "AppUser",
    "Group",
    "INDEX_TITLES",
    "OTHER_BUCKET",
    "Person",
    "PersonNameInput",
    "classify",
    "index_section",
]
