"""Identity layer: resolve a sign-in (provider + external_id) to a stable User.

Each account is one User node. A ChannelLink per sign-in provider points at it,
so signing in again with the same provider account returns the same uid.
"""

import uuid
from datetime import datetime, timezone

from relnet.domain import AppUser

PROVIDER_PASSWORD = "password"
PROVIDER_GOOGLE = "google.com"
PROVIDER_APPLE = "apple.com"
SUPPORTED_PROVIDERS = frozenset({PROVIDER_PASSWORD, PROVIDER_GOOGLE, PROVIDER_APPLE})

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT channel_link_unique IF NOT EXISTS
FOR (c:ChannelLink) REQUIRE (c.provider, c.external_id) IS NODE UNIQUE
"""

_LOOKUP_QUERY = """
MERGE (c:ChannelLink { provider: $provider, external_id: $external_id })
ON CREATE SET c.created_at = $created_at
WITH c
OPTIONAL MATCH (c)-[:BELONGS_TO]->(u:User)
RETURN u
"""

_CREATE_USER_QUERY = """
MATCH (c:ChannelLink { provider: $provider, external_id: $external_id })
WHERE NOT (c)-[:BELONGS_TO]->()
WITH c
MERGE (u:User { id: $user_id })
ON CREATE SET u.created_at = $created_at
SET u.email = $email, u.name = $name
CREATE (c)-[:BELONGS_TO]->(u)
RETURN u
"""

_GET_USER_QUERY = """
MATCH (u:User { id: $user_id })
RETURN u
"""


def _node_to_user(u) -> AppUser:
    return AppUser(
        uid=u["id"],
        email=u.get("email"),
        name=u.get("name"),
        photo_url=u.get("photo_url"),
    )


def ensure_identity_constraint(driver) -> None:
    """Create unique constraint on ChannelLink(provider, external_id) if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


def sign_in(
    driver,
    provider: str,
    external_id: str,
    *,
    email: str | None = None,
    name: str | None = None,
) -> tuple[AppUser, bool]:
    """Resolve (provider, external_id) to a User, creating it on first sign-in.

    Returns (user, is_new_account). email and name are only stored when the
    User is created. Call ensure_identity_constraint at startup so MERGE is unique.
    """
    provider = (provider or "").strip()
    if not provider:
        raise ValueError("provider must be non-empty")
    if provider not in SUPPORTED_PROVIDERS:
        raise ValueError(f"Unsupported provider: {provider}")
    external_id = (external_id or "").strip()
    if not external_id:
        raise ValueError("external_id must be non-empty")

    created_at = datetime.now(timezone.utc).isoformat()
    with driver.session() as session:
        record = session.run(
            _LOOKUP_QUERY,
            provider=provider,
            external_id=external_id,
            created_at=created_at,
        ).single()
        if record and record["u"] is not None:
            return (_node_to_user(record["u"]), False)
        record = session.run(
            _CREATE_USER_QUERY,
            provider=provider,
            external_id=external_id,
            user_id=str(uuid.uuid4()),
            created_at=created_at,
            email=(email or "").strip() or None,
            name=(name or "").strip() or None,
        ).single()
    if not record:
        raise RuntimeError("sign_in: expected one result")
    return (_node_to_user(record["u"]), True)


def get_user(driver, user_id: str) -> AppUser | None:
    """Return the User with this uid, or None. Read-only."""
    user_id = (user_id or "").strip()
    if not user_id:
        return None
    with driver.session() as session:
        record = session.run(_GET_USER_QUERY, user_id=user_id).single()
    if not record:
        return None
    return _node_to_user(record["u"])


class StaticIdentityProvider:
    """IdentityProvider for an already-resolved user (per request, or in tests)."""

    def __init__(self, user: AppUser | None) -> None:
        self._user = user

    def current_user(self) -> AppUser | None:
        return self._user
