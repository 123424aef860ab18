"""Course catalog management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session, selectinload

from config import ROLE_ADMIN, ROLE_INSTRUCTOR
from core.exceptions import CourseNotFoundError, ValidationError
from core.permissions import ensure_owner_or_admin, ensure_role
from models.course import CourseModel
from schemas.course import Course, CourseCreate, CourseUpdate
from schemas.user import User
from utils.converters import model_to_course

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("title", "description", "difficulty", "price", "materials")


class CourseManager:
    """Manages course creation, lookup, update and deletion."""

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, course_id: str) -> CourseModel:
        model = (
            self.db.query(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .filter(CourseModel.course_id == course_id)
            .first()
        )
        if not model:
            raise CourseNotFoundError(course_id)
        return model

    def get_course(self, course_id: str) -> Course:
        return model_to_course(self._get_model(course_id))

    def get_course_title(self, course_id: str) -> Optional[str]:
        """Title of a course, or None once the course has been deleted."""
        model = (
            self.db.query(CourseModel.title)
            .filter(CourseModel.course_id == course_id)
            .first()
        )
        return model.title if model else None

    def list_courses(self) -> List[Course]:
        models = (
            self.db.query(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .order_by(CourseModel.created_at.desc())
            .all()
        )
        return [model_to_course(m) for m in models]

    def list_instructor_courses(self, instructor_id: str) -> List[Course]:
        models = (
            self.db.query(CourseModel)
            .options(selectinload(CourseModel.enrollments))
            .filter(CourseModel.instructor_id == instructor_id)
            .order_by(CourseModel.created_at.desc())
            .all()
        )
        return [model_to_course(m) for m in models]

    def create_course(self, owner: User, req: CourseCreate) -> Course:
        """Create a course owned by the caller.

        Args:
            owner: Authenticated instructor or admin.
            req: Course fields.

        Returns:
            Created Course.

        Raises:
            ForbiddenError: If the caller is not an instructor or admin.
        """
        ensure_role(owner, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")

        data = req.model_dump()
        model = CourseModel(
            course_id=str(uuid.uuid4()),
            instructor_id=owner.user_id,
            instructor_name=owner.name,
            created_at=datetime.now(pytz.utc).isoformat(),
            **data,
        )
        self.db.add(model)
        self.db.commit()
        logger.info("Created course %s by %s", model.course_id, owner.user_id)
        return self.get_course(model.course_id)

    def update_course(self, caller: User, course_id: str, req: CourseUpdate) -> Course:
        """Update a course.

        Raises:
            CourseNotFoundError: If the course does not exist.
            ForbiddenError: If the caller is neither the owner nor an admin.
            ValidationError: If max_enrollments is below the current roster size.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
        model = self._get_model(course_id)
        ensure_owner_or_admin(caller, model.instructor_id)

        changes = req.model_dump(exclude_unset=True)
        new_cap = changes.get("max_enrollments")
        if new_cap is not None and new_cap < len(model.enrollments):
            raise ValidationError(
                f"max_enrollments cannot be below the {len(model.enrollments)} enrolled students"
            )
        for field, value in changes.items():
            # An explicit null only clears nullable fields
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(model, field, value)
        self.db.commit()
        logger.info("Updated course %s by %s", course_id, caller.user_id)
        return self.get_course(course_id)

    def delete_course(self, caller: User, course_id: str) -> None:
        """Delete a course and its enrollments.

        Assessments and results that reference the course are left in place.

        Raises:
            CourseNotFoundError: If the course does not exist.
            ForbiddenError: If the caller is neither the owner nor an admin.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
        model = self._get_model(course_id)
        ensure_owner_or_admin(caller, model.instructor_id)

        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted course %s by %s", course_id, caller.user_id)

    def count_courses(self) -> int:
        return self.db.query(CourseModel).count()
