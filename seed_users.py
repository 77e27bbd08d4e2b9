"""
Bulk-register users from a JSON file into the configured user store.

Run this from the repo root:

    (.venv) python seed_users.py users_seed.json

The file must hold a list of {"username", "email", "password"} objects.
Entries with a missing field or an email that is already registered are
skipped. The store is picked the same way the API picks it (USER_STORE,
DATABASE_URL, USERS_FILE).
"""

import json
import sys
from pathlib import Path

from app.core.config import settings
from app.schemas.user import UserFields
from app.services.user_store import UserStore, build_user_store


def seed(store: UserStore, entries: list) -> tuple[int, int]:
    """Register every new entry. Returns (count_total, count_new)."""
    count_total = 0
    count_new = 0

    for entry in entries:
        count_total += 1

        if not isinstance(entry, dict):
            print(f"[SKIP] Entry #{count_total} is not an object")
            continue

        username = entry.get("username")
        email = entry.get("email")
        password = entry.get("password")
        if not username or not email or not password:
            print(f"[SKIP] Entry #{count_total} is missing a required field")
            continue

        if store.find_by_email(email):
            # Already there, skip
            continue

        store.create(UserFields(username=username, email=email, password=password))
        count_new += 1

    return count_total, count_new


def main(argv: list) -> int:
    if len(argv) != 2:
        print("Usage: python seed_users.py <seed-file.json>")
        return 2

    seed_path = Path(argv[1])
    if not seed_path.exists():
        print(f"[ERROR] Seed file does not exist: {seed_path}")
        return 1

    with open(seed_path, "r", encoding="utf-8") as f:
        entries = json.load(f)

    if not isinstance(entries, list):
        print("[ERROR] Seed file must contain a JSON list")
        return 1

    store = build_user_store(settings)
    print(f"[INFO] Seeding {type(store).__name__} from {seed_path}...")

    count_total, count_new = seed(store, entries)

    print(f"[DONE] Processed {count_total} entries, registered {count_new} new users.")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
