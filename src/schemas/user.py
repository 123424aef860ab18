"""User schema definitions.

This module defines the User data model and the request/response models of
the authentication and user administration endpoints.
"""

import uuid
from datetime import datetime
from typing import List, Literal, Optional

import pytz
from pydantic import BaseModel, EmailStr, Field

Role = Literal["student", "instructor", "admin"]


class User(BaseModel):
    user_id: str = Field(
        description="The unique identifier for the user.",
        default_factory=lambda: str(uuid.uuid4()),
        frozen=True,
    )
    name: str = Field(description="Display name of the user.")
    email: EmailStr = Field(description="Unique email address, used to log in.")
    password_hash: str = Field(description="Bcrypt hash of the password.")
    role: Role = Field(
        default="student",
        description="Role of the user. Fixed at registration, changed by admins only.",
    )
    created_at: str = Field(
        description="The time when the user registered.",
        default_factory=lambda: datetime.now(pytz.utc).isoformat(),
    )


class UserInfo(BaseModel):
    """User information safe to return to clients."""

    user_id: str
    name: str
    email: EmailStr
    role: Role
    created_at: str
    enrolled_courses: List[str] = Field(
        default_factory=list,
        description="IDs of the courses the user is enrolled in.",
    )


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Role = "student"
    admin_token: Optional[str] = Field(
        default=None,
        description="Required when registering with role 'admin'.",
    )


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserInfo


class UpdateUserRequest(BaseModel):
    """Admin update of a user. Omitted fields are left unchanged."""

    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    role: Optional[Role] = None
