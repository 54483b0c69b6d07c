"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from relnet.application.dto import (
    Deleted,
    GroupSaved,
    IndexSection,
    Invalid,
    PersonSaved,
)
from relnet.application.errors import (
    DataServiceError,
    FailedToUpdate,
    NotFoundId,
    NotFoundUser,
)
from relnet.application.person_service import PersonService
from relnet.application.ports import IdentityProvider, PersonRepository, Transliterator

__all__ = [
    "DataServiceError",
    "Deleted",
    "FailedToUpdate",
    "GroupSaved",
    "IdentityProvider",
    "IndexSection",
    "Invalid",
    "NotFoundId",
    "NotFoundUser",
    "PersonRepository",
    "PersonSaved",
    "PersonService",
    "Transliterator",
]
