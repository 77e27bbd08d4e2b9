# File: tests/conftest.py

import os

# Must be set before app.core.config is imported anywhere
os.environ.setdefault("USER_STORE", "memory")
os.environ.setdefault("BCRYPT_ROUNDS", "4")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.db.init_db import init_db
from app.main import create_application
from app.services.user_store import MemoryUserStore, SqlUserStore

TEST_ROUNDS = 4


@pytest.fixture
def store():
    return MemoryUserStore(bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def sql_store():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    session_factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield SqlUserStore(session_factory, bcrypt_rounds=TEST_ROUNDS)
    engine.dispose()


@pytest.fixture
def client(store):
    app = create_application(store=store, settings=Settings(bcrypt_rounds=TEST_ROUNDS))
    with TestClient(app) as c:
        yield c


@pytest.fixture
def alice():
    return {"username": "alice", "email": "alice@example.com", "password": "s3cret"}
