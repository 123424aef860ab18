"""User administration routes (admin only)."""

import logging
from typing import List

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_user
from config import ROLE_ADMIN
from core.dependencies import EnrollmentManagerDep, UserManagerDep
from core.permissions import ensure_role
from schemas.user import UpdateUserRequest, User, UserInfo
from utils.converters import user_to_info

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["User"])


def require_admin(current_user: User = Depends(get_current_user)) -> User:
    """Dependency that only lets admins through."""
    ensure_role(current_user, [ROLE_ADMIN], "Insufficient permissions")
    return current_user


@router.get("", response_model=List[UserInfo], summary="List users")
def list_users(
    user_manager: UserManagerDep,
    enrollment_manager: EnrollmentManagerDep,
    admin: User = Depends(require_admin),
) -> List[UserInfo]:
    return [
        user_to_info(u, enrollment_manager.list_enrolled_course_ids(u.user_id))
        for u in user_manager.list_users()
    ]


@router.get("/{user_id}", response_model=UserInfo, summary="Get a user")
def get_user(
    user_id: str,
    user_manager: UserManagerDep,
    enrollment_manager: EnrollmentManagerDep,
    admin: User = Depends(require_admin),
) -> UserInfo:
    user = user_manager.get_user(user_id)
    return user_to_info(user, enrollment_manager.list_enrolled_course_ids(user_id))


@router.put("/{user_id}", response_model=UserInfo, summary="Update a user")
def update_user(
    user_id: str,
    req: UpdateUserRequest,
    user_manager: UserManagerDep,
    enrollment_manager: EnrollmentManagerDep,
    admin: User = Depends(require_admin),
) -> UserInfo:
    user = user_manager.update_user(user_id, req)
    return user_to_info(user, enrollment_manager.list_enrolled_course_ids(user_id))


@router.delete("/{user_id}", summary="Delete a user")
def delete_user(
    user_id: str,
    user_manager: UserManagerDep,
    admin: User = Depends(require_admin),
) -> dict:
    user_manager.delete_user(user_id)
    logger.info("Admin %s deleted user %s", admin.user_id, user_id)
    return {"success": True, "message": "User deleted successfully"}
