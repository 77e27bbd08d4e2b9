# File: app/api/deps.py

from fastapi import Request

from app.services.user_store import UserStore


def get_user_store(request: Request) -> UserStore:
    """
    FastAPI dependency that provides the application's user store.

    Usage in route functions:
        store: UserStore = Depends(get_user_store)
    """
    return request.app.state.user_store
