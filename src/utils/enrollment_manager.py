"""Enrollment management utilities.

Roster membership is stored once, as a row per (student, course). A student's
courses and a course's roster are both read from that table, so they cannot
drift apart.
"""

import logging
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from config import ROLE_STUDENT
from core.exceptions import AlreadyEnrolledError, CourseFullError, CourseNotFoundError
from core.permissions import ensure_role
from models.course import CourseModel
from models.enrollment import EnrollmentModel
from schemas.course import Course
from schemas.user import User
from utils.converters import model_to_course

logger = logging.getLogger(__name__)


class EnrollmentManager:
    """Manages the (student, course) enrollment relation."""

    def __init__(self, db: Session):
        self.db = db

    def enroll(self, student: User, course_id: str) -> EnrollmentModel:
        """Enroll a student in a course.

        The course row is locked where the backend supports it. On SQLite
        the lock is a no-op, so the new row is flushed first, which takes the
        database write lock, and the roster is counted again before commit.
        A concurrent enrollment that got past the first capacity check is
        rolled back there.

        Args:
            student: Authenticated student.
            course_id: Course to join.

        Returns:
            The created EnrollmentModel.

        Raises:
            ForbiddenError: If the caller is not a student.
            CourseNotFoundError: If the course does not exist.
            AlreadyEnrolledError: If the student is already on the roster.
            CourseFullError: If the roster has reached max_enrollments.
        """
        ensure_role(student, [ROLE_STUDENT], "Only students can enroll in courses")

        course = (
            self.db.query(CourseModel)
            .filter(CourseModel.course_id == course_id)
            .with_for_update()
            .first()
        )
        if not course:
            raise CourseNotFoundError(course_id)

        if self.is_enrolled(student.user_id, course_id):
            self.db.rollback()
            raise AlreadyEnrolledError(course_id)

        max_enrollments = course.max_enrollments
        if max_enrollments is not None and self.roster_size(course_id) >= max_enrollments:
            self._reject_full(student, course_id, max_enrollments)

        enrollment = EnrollmentModel(
            student_id=student.user_id,
            course_id=course_id,
            enrolled_at=datetime.now(pytz.utc).isoformat(),
        )
        try:
            self.db.add(enrollment)
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise AlreadyEnrolledError(course_id) from e

        if max_enrollments is not None and self.roster_size(course_id) > max_enrollments:
            self._reject_full(student, course_id, max_enrollments)
        self.db.commit()

        self.db.refresh(enrollment)
        logger.info("Enrolled student %s in course %s", student.user_id, course_id)
        return enrollment

    def _reject_full(self, student: User, course_id: str, max_enrollments: int) -> None:
        self.db.rollback()
        logger.warning("Course %s is full, rejected student %s", course_id, student.user_id)
        raise CourseFullError(course_id, max_enrollments)

    def is_enrolled(self, student_id: str, course_id: str) -> bool:
        return (
            self.db.query(EnrollmentModel)
            .filter(
                EnrollmentModel.student_id == student_id,
                EnrollmentModel.course_id == course_id,
            )
            .first()
            is not None
        )

    def roster_size(self, course_id: str) -> int:
        return (
            self.db.query(EnrollmentModel)
            .filter(EnrollmentModel.course_id == course_id)
            .count()
        )

    def list_roster(self, course_id: str) -> List[str]:
        """Student IDs enrolled in a course, oldest enrollment first."""
        rows = (
            self.db.query(EnrollmentModel.student_id)
            .filter(EnrollmentModel.course_id == course_id)
            .order_by(EnrollmentModel.id)
            .all()
        )
        return [row.student_id for row in rows]

    def list_enrolled_course_ids(self, student_id: str) -> List[str]:
        rows = (
            self.db.query(EnrollmentModel.course_id)
            .filter(EnrollmentModel.student_id == student_id)
            .order_by(EnrollmentModel.id)
            .all()
        )
        return [row.course_id for row in rows]

    def list_enrolled_courses(self, student_id: str) -> List[Course]:
        models = (
            self.db.query(CourseModel)
            .join(EnrollmentModel, EnrollmentModel.course_id == CourseModel.course_id)
            .filter(EnrollmentModel.student_id == student_id)
            .order_by(EnrollmentModel.id)
            .all()
        )
        return [model_to_course(m) for m in models]

    def count_enrollments(self) -> int:
        return self.db.query(EnrollmentModel).count()
