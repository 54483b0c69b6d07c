"""Infrastructure layer: concrete implementations of application ports."""

from relnet.infrastructure.identity import (
    PROVIDER_APPLE,
    PROVIDER_GOOGLE,
    PROVIDER_PASSWORD,
    StaticIdentityProvider,
    ensure_identity_constraint,
    get_user,
    sign_in,
)
from relnet.infrastructure.memory_repository import InMemoryPersonRepository
from relnet.infrastructure.persistence.neo4j_repository import Neo4jPersonRepository
from relnet.infrastructure.transliteration import KakasiTransliterator

__all__ = [
    "InMemoryPersonRepository",
    "KakasiTransliterator",
    "Neo4jPersonRepository",
    "PROVIDER_APPLE",
    "PROVIDER_GOOGLE",
    "PROVIDER_PASSWORD",
    "StaticIdentityProvider",
    "ensure_identity_constraint",
    "get_user",
    "sign_in",
]
