# File: app/schemas/user.py

from typing import List, Optional

from pydantic import BaseModel


# ---------- Request bodies ----------
# Fields are optional on purpose: presence is checked by the handlers so a
# missing field gets the same error response as any other failure.

class RegisterRequest(BaseModel):
    username: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UpdateRequest(RegisterRequest):
    pass


class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


# ---------- Store types ----------

class UserFields(BaseModel):
    """Validated username/email/password handed to a store."""
    username: str
    email: str
    password: str


class UserInDB(BaseModel):
    id: str
    username: str
    email: str
    password: str  # bcrypt hash

    class Config:
        from_attributes = True


# ---------- Responses ----------

class UserRead(BaseModel):
    id: str
    username: str
    email: str

    class Config:
        from_attributes = True


class UserListResponse(BaseModel):
    total_user: int
    allUsers: List[UserRead]


class UserResponse(BaseModel):
    user: UserRead


class NewUserResponse(BaseModel):
    newUser: UserRead


class UpdateUserResponse(BaseModel):
    updateUser: UserRead


class MessageResponse(BaseModel):
    message: str
