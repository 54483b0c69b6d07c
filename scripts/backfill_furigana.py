#!/usr/bin/env python3
"""One-off maintenance: fill missing furigana on stored persons.

For every User, reads each Person whose last or first name contains Japanese
script but has no furigana, and stores the katakana reading from pykakasi.
Persons whose names cannot be read are left alone. Run from repo root with
.env (NEO4J_URI, NEO4J_USER, NEO4J_PASSWORD). Idempotent.
"""
import os
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT / "src"))

from dotenv import load_dotenv  # noqa: E402
from neo4j import GraphDatabase  # noqa: E402

from relnet.application import PersonService  # noqa: E402
from relnet.domain import AppUser  # noqa: E402
from relnet.infrastructure import (  # noqa: E402
    KakasiTransliterator,
    Neo4jPersonRepository,
    StaticIdentityProvider,
)

load_dotenv(REPO_ROOT / ".env")

_FIND_USERS = """
MATCH (u:User)
RETURN u.id AS user_id
"""


def main() -> int:
    uri = os.environ.get("NEO4J_URI", "bolt://localhost:7687").strip()
    user = os.environ.get("NEO4J_USER", "neo4j").strip()
    password = os.environ.get("NEO4J_PASSWORD", "password").strip()
    driver = GraphDatabase.driver(uri, auth=(user, password))
    transliterator = KakasiTransliterator()
    try:
        with driver.session() as session:
            user_ids = [r["user_id"] for r in session.run(_FIND_USERS)]

        if not user_ids:
            print("No users found. Nothing to backfill.")
            return 0

        filled = 0
        for user_id in user_ids:
            repo = Neo4jPersonRepository(driver, StaticIdentityProvider(AppUser(uid=user_id)))
            service = PersonService(repo, transliterator=transliterator)
            for person in service.list_persons():
                updated = service.fill_furigana(person)
                if updated != person:
                    repo.update_person(updated)
                    filled += 1

        print(f"Filled furigana on {filled} person(s) across {len(user_ids)} user(s).")
        return 0
    except Exception as e:
        print(f"Backfill failed: {e}", file=sys.stderr)
        return 1
    finally:
        driver.close()


if __name__ == "__main__":
    sys.exit(main())
