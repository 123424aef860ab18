"""User management utilities.

This module provides user management functionality including user storage,
password hashing, registration, authentication and admin updates.
"""

import logging
from typing import List, Optional

import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ADMIN_REGISTRATION_TOKEN, BCRYPT_ROUNDS, ROLE_ADMIN, ROLE_STUDENT
from core.exceptions import (
    ForbiddenError,
    UnauthenticatedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from models.enrollment import EnrollmentModel
from models.user import UserModel
from schemas.user import UpdateUserRequest, User
from utils.converters import model_to_user, user_to_model

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and compared lower-cased."""
    return email.strip().lower()


class UserManager:
    """Manages user data persistence and operations using SQLAlchemy."""

    def __init__(self, db: Session):
        """Initialize UserManager.

        Args:
            db: SQLAlchemy Session.
        """
        self.db = db

    def hash_password(self, password: str) -> str:
        """Hash a password using bcrypt.

        Args:
            password: Plain text password.

        Returns:
            Hashed password (bcrypt hash string).
        """
        # bcrypt only looks at the first 72 bytes
        password_bytes = password.encode("utf-8")[:72]
        salt = bcrypt.gensalt(rounds=BCRYPT_ROUNDS)
        return bcrypt.hashpw(password_bytes, salt).decode("utf-8")

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        """Verify a password against a bcrypt hash.

        Args:
            plain_password: Plain text password to verify.
            hashed_password: Bcrypt hash string to verify against.

        Returns:
            True if password matches, False otherwise.
        """
        password_bytes = plain_password.encode("utf-8")[:72]
        try:
            return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
        except ValueError as e:
            logger.error("Password verification error: %s", e)
            return False

    def register(
        self,
        name: str,
        email: str,
        password: str,
        role: str = ROLE_STUDENT,
        admin_token: Optional[str] = None,
    ) -> User:
        """Register a new user.

        Args:
            name: Display name.
            email: Email address, unique across users.
            password: Plain text password.
            role: Requested role. Fixed from here on except by an admin.
            admin_token: Must equal ADMIN_REGISTRATION_TOKEN for role admin.

        Returns:
            Created User object.

        Raises:
            ForbiddenError: If an admin registration lacks a valid token.
            UserAlreadyExistsError: If the email is already registered.
        """
        if role == ROLE_ADMIN:
            if not ADMIN_REGISTRATION_TOKEN or admin_token != ADMIN_REGISTRATION_TOKEN:
                logger.warning("Rejected admin self-registration for %s", email)
                raise ForbiddenError("Admin registration requires a valid admin token")
        return self.create_user(name=name, email=email, password=password, role=role)

    def create_user(self, name: str, email: str, password: str, role: str) -> User:
        """Create and persist a user without any role checks.

        Raises:
            UserAlreadyExistsError: If the email is already registered.
        """
        email = normalize_email(email)
        if self._get_model_by_email(email) is not None:
            raise UserAlreadyExistsError(email)

        user = User(
            name=name,
            email=email,
            password_hash=self.hash_password(password),
            role=role,
        )

        # The unique constraint catches two registrations racing past the check
        try:
            self.db.add(user_to_model(user))
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(email) from e

        logger.info("Created user: %s (%s)", email, role)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials.

        Raises:
            UnauthenticatedError: If the email is unknown or the password wrong.
        """
        model = self._get_model_by_email(email)
        if model is None or not self.verify_password(password, model.password_hash):
            raise UnauthenticatedError("Invalid credentials")
        return model_to_user(model)

    def _get_model_by_email(self, email: str) -> Optional[UserModel]:
        return (
            self.db.query(UserModel)
            .filter(UserModel.email == normalize_email(email))
            .first()
        )

    def _get_model(self, user_id: str) -> UserModel:
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if not model:
            raise UserNotFoundError(user_id)
        return model

    def get_user_by_id(self, user_id: str) -> Optional[User]:
        """Get a user by user ID.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.user_id == user_id).first()
        if model:
            return model_to_user(model)
        return None

    def get_user(self, user_id: str) -> User:
        """Get a user by user ID, raising UserNotFoundError if absent."""
        return model_to_user(self._get_model(user_id))

    def list_users(self) -> List[User]:
        models = self.db.query(UserModel).order_by(UserModel.created_at).all()
        return [model_to_user(m) for m in models]

    def update_user(self, user_id: str, req: UpdateUserRequest) -> User:
        """Apply an admin update to a user.

        Args:
            user_id: User to update.
            req: Fields to change; None fields are left as they are.

        Returns:
            Updated User object.

        Raises:
            UserNotFoundError: If the user does not exist.
            UserAlreadyExistsError: If the new email belongs to another user.
        """
        model = self._get_model(user_id)
        changes = req.model_dump(exclude_none=True)
        if "email" in changes:
            changes["email"] = normalize_email(changes["email"])

        if "email" in changes and changes["email"] != model.email:
            if self._get_model_by_email(changes["email"]) is not None:
                raise UserAlreadyExistsError(changes["email"])
        if "password" in changes:
            model.password_hash = self.hash_password(changes.pop("password"))
        for field, value in changes.items():
            setattr(model, field, value)

        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise UserAlreadyExistsError(changes.get("email", model.email)) from e
        self.db.refresh(model)
        logger.info("Updated user %s: %s", user_id, sorted(req.model_dump(exclude_none=True)))
        return model_to_user(model)

    def delete_user(self, user_id: str) -> None:
        """Delete a user and their enrollments.

        Results and owned courses are kept.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        model = self._get_model(user_id)
        self.db.query(EnrollmentModel).filter(
            EnrollmentModel.student_id == user_id
        ).delete()
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted user: %s", user_id)

    def count_users(self, role: Optional[str] = None) -> int:
        query = self.db.query(UserModel)
        if role:
            query = query.filter(UserModel.role == role)
        return query.count()
