"""Role and ownership policy.

Pure functions of (caller, resource owner, allowed roles). They never read
request or database state; callers pass everything in.
"""

from typing import Iterable, Optional

from config import ROLE_ADMIN, ROLE_STUDENT
from core.exceptions import ForbiddenError
from schemas.user import User


def has_role(user: User, roles: Iterable[str]) -> bool:
    return user.role in roles


def ensure_role(user: User, roles: Iterable[str], message: Optional[str] = None) -> None:
    """Raise ForbiddenError unless the user's role is in ``roles``."""
    roles = list(roles)
    if not has_role(user, roles):
        raise ForbiddenError(
            message or f"Requires role: {', '.join(roles)}"
        )


def can_mutate(user: User, owner_id: str) -> bool:
    """Whether the user may change a resource owned by ``owner_id``.

    Owners may change their own resources and admins may change any.
    """
    return user.role == ROLE_ADMIN or user.user_id == owner_id


def ensure_owner_or_admin(user: User, owner_id: str, message: Optional[str] = None) -> None:
    """Raise ForbiddenError unless the user owns the resource or is an admin."""
    if not can_mutate(user, owner_id):
        raise ForbiddenError(message or "Not authorized")


def can_see_answers(user: User, assessment) -> bool:
    """Whether correct answers of an assessment may be shown to the user."""
    return user.role != ROLE_STUDENT and can_mutate(user, assessment.instructor_id)
