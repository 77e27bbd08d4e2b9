# File: tests/test_user_store.py

import json

import pytest

from app.core.config import Settings
from app.core.errors import UserNotFoundError
from app.schemas.user import UserFields
from app.services.user_store import (
    JsonFileUserStore,
    MemoryUserStore,
    SqlUserStore,
    build_user_store,
)

ALICE = UserFields(username="alice", email="alice@example.com", password="s3cret")
BOB = UserFields(username="bob", email="bob@example.com", password="hunter2")


@pytest.fixture(params=["memory", "json", "sql"])
def any_store(request, tmp_path, store, sql_store):
    if request.param == "memory":
        return store
    if request.param == "json":
        return JsonFileUserStore(tmp_path / "users.json", bcrypt_rounds=4)
    return sql_store


def test_create_hashes_password(any_store):
    user = any_store.create(ALICE)
    assert user.id
    assert user.password != ALICE.password
    assert user.password.startswith("$2")


def test_find_one_and_by_email(any_store):
    user = any_store.create(ALICE)

    assert any_store.find_one(user.id).email == ALICE.email
    assert any_store.find_by_email(ALICE.email).id == user.id
    assert any_store.find_one("nope") is None
    assert any_store.find_by_email("nobody@example.com") is None


def test_find_all(any_store):
    assert any_store.find_all() == []
    any_store.create(ALICE)
    any_store.create(BOB)
    assert sorted(u.email for u in any_store.find_all()) == [ALICE.email, BOB.email]


def test_update_replaces_fields(any_store):
    user = any_store.create(ALICE)

    updated = any_store.update(user.id, BOB)
    assert updated.id == user.id
    assert updated.username == "bob"
    assert updated.email == BOB.email
    assert any_store.compare_password(BOB.email, BOB.password)
    assert any_store.find_by_email(ALICE.email) is None


def test_update_unknown_raises(any_store):
    with pytest.raises(UserNotFoundError):
        any_store.update("missing", ALICE)


def test_remove(any_store):
    user = any_store.create(ALICE)
    any_store.remove(user.id)
    assert any_store.find_one(user.id) is None

    # Removing again is a no-op
    any_store.remove(user.id)


def test_compare_password(any_store):
    any_store.create(ALICE)
    assert any_store.compare_password(ALICE.email, ALICE.password) is True
    assert any_store.compare_password(ALICE.email, "wrong") is False
    assert any_store.compare_password("nobody@example.com", ALICE.password) is False


def test_stores_allow_duplicate_emails(any_store):
    # Uniqueness is the register handler's job, not the store's
    any_store.create(ALICE)
    any_store.create(ALICE)
    assert len(any_store.find_all()) == 2


def test_json_store_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "users.json"
    first = JsonFileUserStore(path, bcrypt_rounds=4)
    user = first.create(ALICE)

    on_disk = json.loads(path.read_text(encoding="utf-8"))
    assert on_disk[user.id]["email"] == ALICE.email

    second = JsonFileUserStore(path, bcrypt_rounds=4)
    assert second.find_one(user.id).username == "alice"
    assert second.compare_password(ALICE.email, ALICE.password)

    second.remove(user.id)
    assert JsonFileUserStore(path, bcrypt_rounds=4).find_all() == []


def test_build_user_store_memory():
    store = build_user_store(Settings(user_store="memory", bcrypt_rounds=4))
    assert isinstance(store, MemoryUserStore)
    assert store.bcrypt_rounds == 4


def test_build_user_store_json(tmp_path):
    store = build_user_store(
        Settings(user_store="JSON", users_file=str(tmp_path / "u.json"), bcrypt_rounds=4)
    )
    assert isinstance(store, JsonFileUserStore)


def test_build_user_store_sql(tmp_path):
    url = f"sqlite:///{tmp_path / 'users.db'}"
    store = build_user_store(Settings(user_store="sql", database_url=url, bcrypt_rounds=4))
    assert isinstance(store, SqlUserStore)

    user = store.create(ALICE)
    assert store.find_one(user.id).email == ALICE.email


def test_json_store_failed_write_leaves_memory_unchanged(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = JsonFileUserStore(blocker / "users.json", bcrypt_rounds=4)

    with pytest.raises(OSError):
        store.create(ALICE)

    assert store.find_all() == []
    assert store.find_by_email(ALICE.email) is None


def test_json_store_failed_write_keeps_previous_state(tmp_path, monkeypatch):
    store = JsonFileUserStore(tmp_path / "users.json", bcrypt_rounds=4)
    user = store.create(ALICE)

    def fail(users):
        raise OSError("disk full")

    monkeypatch.setattr(store, "_persist", fail)

    with pytest.raises(OSError):
        store.update(user.id, BOB)
    with pytest.raises(OSError):
        store.remove(user.id)

    assert store.find_one(user.id).email == ALICE.email
    assert len(store.find_all()) == 1


def test_memory_store_returns_copies(store):
    user = store.create(ALICE)

    fetched = store.find_one(user.id)
    fetched.email = "changed@example.com"
    user.username = "changed"
    store.find_all()[0].password = "plain"

    stored = store.find_one(user.id)
    assert stored.email == ALICE.email
    assert stored.username == "alice"
    assert store.compare_password(ALICE.email, ALICE.password)
