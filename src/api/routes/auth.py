"""Authentication routes.

This module handles HTTP endpoints for registration and login, and provides
the ``get_current_user`` dependency that resolves a bearer token to a user.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import pytz
from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, JWT_SECRET_KEY
from core.dependencies import EnrollmentManagerDep, UserManagerDep
from core.exceptions import UnauthenticatedError
from schemas.user import AuthResponse, LoginRequest, RegisterRequest, User, UserInfo
from utils.converters import user_to_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])

# Missing credentials are reported by verify_token, not by HTTPBearer
security = HTTPBearer(auto_error=False)


def create_access_token(user: User, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token for a user.

    Args:
        user: User the token identifies.
        expires_delta: Optional expiration time delta. Defaults to
            ACCESS_TOKEN_EXPIRE_MINUTES.

    Returns:
        Encoded JWT token string carrying the user's id, email and role.
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode = {
        "sub": user.user_id,
        "email": user.email,
        "role": user.role,
        "exp": datetime.now(pytz.utc) + expires_delta,
    }
    return jwt.encode(to_encode, JWT_SECRET_KEY, algorithm=JWT_ALGORITHM)


def verify_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Verify JWT token from Authorization header.

    Args:
        credentials: HTTP Bearer token credentials.

    Returns:
        Decoded token payload.

    Raises:
        UnauthenticatedError: If the token is missing, invalid or expired.
    """
    if credentials is None:
        raise UnauthenticatedError("Access token required")
    try:
        payload = jwt.decode(
            credentials.credentials, JWT_SECRET_KEY, algorithms=[JWT_ALGORITHM]
        )
    except JWTError:
        raise UnauthenticatedError("Invalid authentication credentials")
    if payload.get("sub") is None:
        raise UnauthenticatedError("Invalid authentication credentials")
    return payload


def get_current_user(
    user_manager: UserManagerDep,
    token_payload: dict = Depends(verify_token),
) -> User:
    """Get current authenticated user.

    The role is read from the stored user, not the token, so an admin's role
    change applies to tokens issued before it.

    Raises:
        UnauthenticatedError: If the token's user no longer exists.
    """
    user = user_manager.get_user_by_id(token_payload["sub"])
    if user is None:
        raise UnauthenticatedError("User not found")
    return user


@router.post(
    "/register",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
def register(req: RegisterRequest, user_manager: UserManagerDep) -> AuthResponse:
    """Register a new user and log them in.

    Registering as admin requires ``admin_token``.
    """
    user = user_manager.register(
        name=req.name,
        email=req.email,
        password=req.password,
        role=req.role,
        admin_token=req.admin_token,
    )
    return AuthResponse(
        message="User created successfully",
        token=create_access_token(user),
        user=user_to_info(user),
    )


@router.post("/login", response_model=AuthResponse, summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    enrollment_manager: EnrollmentManagerDep,
) -> AuthResponse:
    """Login with email and password.

    Raises:
        UnauthenticatedError: If the credentials do not match.
    """
    user = user_manager.authenticate(req.email, req.password)
    logger.info("User logged in: %s", user.user_id)
    return AuthResponse(
        message="Login successful",
        token=create_access_token(user),
        user=user_to_info(
            user, enrollment_manager.list_enrolled_course_ids(user.user_id)
        ),
    )


@router.get("/profile", response_model=UserInfo, summary="Current user profile")
def get_profile(
    enrollment_manager: EnrollmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> UserInfo:
    return user_to_info(
        current_user, enrollment_manager.list_enrolled_course_ids(current_user.user_id)
    )
