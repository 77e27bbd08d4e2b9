# File: app/api/v1/routes_users.py

"""
User endpoints: list, get, register, login, update, delete.

Handlers only check that the required fields are present and that the
target user exists, then make a single store call. Every failure is
raised as a UserServiceError and turned into a response by the handler
registered in app.api.errors.
"""

import logging

from fastapi import APIRouter, Depends, status

from app.api.deps import get_user_store
from app.core.errors import (
    EmailAlreadyRegisteredError,
    InvalidCredentialsError,
    MissingFieldsError,
    NoUsersError,
    UserNotFoundError,
)
from app.schemas.user import (
    LoginRequest,
    MessageResponse,
    NewUserResponse,
    RegisterRequest,
    UpdateRequest,
    UserFields,
    UserListResponse,
    UserRead,
    UserResponse,
    UpdateUserResponse,
)
from app.services.user_store import UserStore

logger = logging.getLogger("users.api")

router = APIRouter()


def _require_fields(payload: RegisterRequest) -> UserFields:
    if not payload.username or not payload.email or not payload.password:
        raise MissingFieldsError()
    return UserFields(
        username=payload.username,
        email=payload.email,
        password=payload.password,
    )


@router.get("/users", response_model=UserListResponse, summary="List all users")
def list_users(store: UserStore = Depends(get_user_store)):
    all_users = store.find_all()

    # An empty list is a valid answer; only a missing result is an error
    if all_users is None:
        raise NoUsersError("No users at this time..")

    return {
        "total_user": len(all_users),
        "allUsers": [UserRead.model_validate(u) for u in all_users],
    }


@router.get("/user/{user_id}", response_model=UserResponse, summary="Get a user by id")
def get_user(user_id: str, store: UserStore = Depends(get_user_store)):
    user = store.find_one(user_id)

    if not user:
        raise UserNotFoundError("User not found!")

    return {"user": UserRead.model_validate(user)}


@router.post(
    "/register",
    response_model=NewUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(payload: RegisterRequest, store: UserStore = Depends(get_user_store)):
    fields = _require_fields(payload)

    # Check-then-insert is not atomic: two concurrent registrations with the
    # same email can both get past this lookup.
    if store.find_by_email(fields.email):
        raise EmailAlreadyRegisteredError("This email has already been registered..")

    new_user = store.create(fields)
    logger.debug(f"[routes_users.register] id={new_user.id}")

    return {"newUser": UserRead.model_validate(new_user)}


@router.post("/login", response_model=UserResponse, summary="Check a user's credentials")
def login(payload: LoginRequest, store: UserStore = Depends(get_user_store)):
    if not payload.email or not payload.password:
        raise MissingFieldsError()

    user = store.find_by_email(payload.email)

    if not user:
        raise InvalidCredentialsError("No user exists with the email provided..")

    if not store.compare_password(payload.email, payload.password):
        raise InvalidCredentialsError("Incorrect Password!")

    return {"user": UserRead.model_validate(user)}


@router.put(
    "/user/{user_id}",
    response_model=UpdateUserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Replace a user's username, email and password",
)
def update_user(
    user_id: str,
    payload: UpdateRequest,
    store: UserStore = Depends(get_user_store),
):
    existing = store.find_one(user_id)

    # Missing fields are reported before an unknown id
    fields = _require_fields(payload)

    if not existing:
        raise UserNotFoundError(f"No user with id {user_id}")

    updated = store.update(user_id, fields)

    return {"updateUser": UserRead.model_validate(updated)}


@router.delete("/user/{user_id}", response_model=MessageResponse, summary="Delete a user")
def delete_user(user_id: str, store: UserStore = Depends(get_user_store)):
    user = store.find_one(user_id)

    if not user:
        raise UserNotFoundError("User does not exist")

    store.remove(user_id)

    return {"message": "User deleted"}
