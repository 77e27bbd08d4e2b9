# File: app/services/user_store.py

"""
User datastores.

Every store exposes the same small capability used by the user routes:

    find_all, find_one, find_by_email, create, update, remove,
    compare_password

Stores hash passwords on create/update and hand back UserInDB objects, so
the routes never see an ORM row or a raw dict. None of them enforce email
uniqueness; that check lives in the register handler.
"""

import json
import logging
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from sqlalchemy.orm import Session, sessionmaker

from app.core.config import Settings
from app.core.errors import UserNotFoundError
from app.core.security import hash_password, verify_password
from app.models.user import User, new_user_id
from app.schemas.user import UserFields, UserInDB

logger = logging.getLogger("users.store")


class UserStore(ABC):
    def __init__(self, bcrypt_rounds: Optional[int] = None):
        self.bcrypt_rounds = bcrypt_rounds

    @abstractmethod
    def find_all(self) -> List[UserInDB]:
        ...

    @abstractmethod
    def find_one(self, user_id: str) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def find_by_email(self, email: str) -> Optional[UserInDB]:
        ...

    @abstractmethod
    def create(self, fields: UserFields) -> UserInDB:
        ...

    @abstractmethod
    def update(self, user_id: str, fields: UserFields) -> UserInDB:
        """Replace username, email and password. Raises UserNotFoundError."""

    @abstractmethod
    def remove(self, user_id: str) -> None:
        """Delete a user. Unknown ids are ignored."""

    def compare_password(self, email: str, plain_password: str) -> bool:
        user = self.find_by_email(email)
        if user is None:
            return False
        return verify_password(plain_password, user.password)

    def _hash(self, plain: str) -> str:
        return hash_password(plain, rounds=self.bcrypt_rounds)


# -----------------------------
# IN-MEMORY
# -----------------------------
class MemoryUserStore(UserStore):
    """Users kept in a dict keyed by id, in insertion order."""

    def __init__(self, bcrypt_rounds: Optional[int] = None):
        super().__init__(bcrypt_rounds)
        self._users: Dict[str, UserInDB] = {}
        self._lock = threading.Lock()

    def find_all(self) -> List[UserInDB]:
        with self._lock:
            return [user.model_copy() for user in self._users.values()]

    def find_one(self, user_id: str) -> Optional[UserInDB]:
        with self._lock:
            user = self._users.get(user_id)
            return user.model_copy() if user else None

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        with self._lock:
            for user in self._users.values():
                if user.email == email:
                    return user.model_copy()
        return None

    def create(self, fields: UserFields) -> UserInDB:
        user = UserInDB(
            id=new_user_id(),
            username=fields.username,
            email=fields.email,
            password=self._hash(fields.password),
        )
        with self._lock:
            users = dict(self._users)
            users[user.id] = user
            self._commit(users)
        logger.info("Created user %s", user.id)
        return user.model_copy()

    def update(self, user_id: str, fields: UserFields) -> UserInDB:
        hashed = self._hash(fields.password)
        with self._lock:
            if user_id not in self._users:
                raise UserNotFoundError(f"No user with id {user_id}")
            user = UserInDB(
                id=user_id,
                username=fields.username,
                email=fields.email,
                password=hashed,
            )
            users = dict(self._users)
            users[user_id] = user
            self._commit(users)
        logger.info("Updated user %s", user_id)
        return user.model_copy()

    def remove(self, user_id: str) -> None:
        with self._lock:
            if user_id not in self._users:
                return
            users = dict(self._users)
            del users[user_id]
            self._commit(users)
        logger.info("Removed user %s", user_id)

    def _commit(self, users: Dict[str, UserInDB]) -> None:
        # Swap in the new map only once it has been persisted
        self._persist(users)
        self._users = users

    def _persist(self, users: Dict[str, UserInDB]) -> None:
        """Hook run under the lock before a mutation becomes visible."""


# -----------------------------
# JSON FILE
# -----------------------------
class JsonFileUserStore(MemoryUserStore):
    """
    In-memory store mirrored to a JSON file.

    The file holds one object keyed by user id and is rewritten in full
    on each mutation. A missing file means an empty store. If the write
    fails, the mutation is not applied in memory either.
    """

    def __init__(self, path, bcrypt_rounds: Optional[int] = None):
        super().__init__(bcrypt_rounds)
        self.path = Path(path)
        self._users = self._load()

    def _load(self) -> Dict[str, UserInDB]:
        if not self.path.exists():
            return {}

        with open(self.path, "r", encoding="utf-8") as f:
            raw = json.load(f)

        users = {user_id: UserInDB(**data) for user_id, data in raw.items()}
        logger.info("Loaded %d users from %s", len(users), self.path)
        return users

    def _persist(self, users: Dict[str, UserInDB]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {user_id: user.model_dump() for user_id, user in users.items()}

        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)


# -----------------------------
# SQLALCHEMY
# -----------------------------
class SqlUserStore(UserStore):
    """Users in the `users` table, one session per call."""

    def __init__(self, session_factory: sessionmaker, bcrypt_rounds: Optional[int] = None):
        super().__init__(bcrypt_rounds)
        self.session_factory = session_factory

    def find_all(self) -> List[UserInDB]:
        with self.session_factory() as db:
            rows = db.query(User).all()
            return [UserInDB.model_validate(row) for row in rows]

    def find_one(self, user_id: str) -> Optional[UserInDB]:
        with self.session_factory() as db:
            row = db.get(User, user_id)
            return UserInDB.model_validate(row) if row else None

    def find_by_email(self, email: str) -> Optional[UserInDB]:
        with self.session_factory() as db:
            row = db.query(User).filter(User.email == email).first()
            return UserInDB.model_validate(row) if row else None

    def create(self, fields: UserFields) -> UserInDB:
        row = User(
            id=new_user_id(),
            username=fields.username,
            email=fields.email,
            password=self._hash(fields.password),
        )
        with self.session_factory() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            user = UserInDB.model_validate(row)
        logger.info("Created user %s", user.id)
        return user

    def update(self, user_id: str, fields: UserFields) -> UserInDB:
        with self.session_factory() as db:
            row = self._get_row(db, user_id)
            row.username = fields.username
            row.email = fields.email
            row.password = self._hash(fields.password)
            db.commit()
            db.refresh(row)
            user = UserInDB.model_validate(row)
        logger.info("Updated user %s", user_id)
        return user

    def remove(self, user_id: str) -> None:
        with self.session_factory() as db:
            row = db.get(User, user_id)
            if row is None:
                return
            db.delete(row)
            db.commit()
        logger.info("Removed user %s", user_id)

    @staticmethod
    def _get_row(db: Session, user_id: str) -> User:
        row = db.get(User, user_id)
        if row is None:
            raise UserNotFoundError(f"No user with id {user_id}")
        return row


def build_user_store(settings: Settings) -> UserStore:
    """Pick and prepare the store named by settings.user_store."""
    rounds = settings.bcrypt_rounds

    if settings.user_store == "memory":
        return MemoryUserStore(bcrypt_rounds=rounds)

    if settings.user_store == "json":
        return JsonFileUserStore(settings.users_file, bcrypt_rounds=rounds)

    # Imported here so the memory/json stores never open the default engine
    from app.db.init_db import init_db
    from app.db.session import SQLALCHEMY_DATABASE_URL, SessionLocal, engine, make_engine

    if settings.database_url == SQLALCHEMY_DATABASE_URL:
        bind = engine
        session_factory = SessionLocal
    else:
        bind = make_engine(settings.database_url)
        session_factory = sessionmaker(autocommit=False, autoflush=False, bind=bind)

    init_db(bind)
    logger.info("Using SQL user store at %s", bind.url.render_as_string(hide_password=True))
    return SqlUserStore(session_factory, bcrypt_rounds=rounds)
