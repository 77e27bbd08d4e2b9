"""
Database initialization helpers.

Models are imported so their tables get registered on Base.metadata.
"""

from typing import Optional

from sqlalchemy.engine import Engine

from app.db.session import engine as default_engine
from app.models.base import Base

from app.models import user  # noqa: F401


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create all tables based on SQLAlchemy models.
    """
    Base.metadata.create_all(bind=bind or default_engine)
