"""Assessment management utilities."""

import logging
import uuid
from datetime import datetime
from typing import List

import pytz
from sqlalchemy.orm import Session

from config import ROLE_ADMIN, ROLE_INSTRUCTOR
from core.exceptions import AssessmentNotFoundError, CourseNotFoundError
from core.permissions import ensure_owner_or_admin, ensure_role
from models.assessment import AssessmentModel
from models.course import CourseModel
from schemas.assessment import Assessment, AssessmentCreate, AssessmentUpdate
from schemas.user import User
from utils.converters import model_to_assessment
from utils.grading import compute_total_points

logger = logging.getLogger(__name__)


class AssessmentManager:
    """Manages assessments and their embedded question lists."""

    def __init__(self, db: Session):
        self.db = db

    def _get_model(self, assessment_id: str) -> AssessmentModel:
        model = (
            self.db.query(AssessmentModel)
            .filter(AssessmentModel.assessment_id == assessment_id)
            .first()
        )
        if not model:
            raise AssessmentNotFoundError(assessment_id)
        return model

    def _course_title(self, course_id: str):
        row = (
            self.db.query(CourseModel.title)
            .filter(CourseModel.course_id == course_id)
            .first()
        )
        return row.title if row else None

    def get_assessment(self, assessment_id: str) -> Assessment:
        model = self._get_model(assessment_id)
        return model_to_assessment(model, self._course_title(model.course_id))

    def list_course_assessments(self, course_id: str) -> List[Assessment]:
        """List the active assessments of a course."""
        models = (
            self.db.query(AssessmentModel)
            .filter(
                AssessmentModel.course_id == course_id,
                AssessmentModel.is_active.is_(True),
            )
            .order_by(AssessmentModel.created_at)
            .all()
        )
        title = self._course_title(course_id)
        return [model_to_assessment(m, title) for m in models]

    def create_assessment(self, caller: User, req: AssessmentCreate) -> Assessment:
        """Create an assessment for a course the caller owns.

        ``total_points`` is computed here, once, from the submitted questions.
        The assessment belongs to the course owner, also when an admin
        creates it.

        Args:
            caller: Authenticated instructor or admin.
            req: Assessment fields and questions.

        Returns:
            Created Assessment.

        Raises:
            ForbiddenError: If the caller is not an instructor/admin, or is an
                instructor who does not own the course.
            CourseNotFoundError: If the course does not exist.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")

        course = (
            self.db.query(CourseModel)
            .filter(CourseModel.course_id == req.course_id)
            .first()
        )
        if not course:
            raise CourseNotFoundError(req.course_id)
        ensure_owner_or_admin(
            caller,
            course.instructor_id,
            "Only the course owner can add assessments",
        )

        model = AssessmentModel(
            assessment_id=str(uuid.uuid4()),
            title=req.title,
            description=req.description,
            course_id=req.course_id,
            instructor_id=course.instructor_id,
            questions=[q.model_dump() for q in req.questions],
            total_points=compute_total_points(req.questions),
            time_limit=req.time_limit,
            attempts=req.attempts,
            is_active=req.is_active,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self.db.commit()
        logger.info(
            "Created assessment %s for course %s (%d points)",
            model.assessment_id,
            model.course_id,
            model.total_points,
        )
        return self.get_assessment(model.assessment_id)

    def update_assessment(
        self, caller: User, assessment_id: str, req: AssessmentUpdate
    ) -> Assessment:
        """Update an assessment.

        Replacing questions keeps the stored ``total_points``; results keep
        being graded against the total fixed at creation.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            ForbiddenError: If the caller is neither the owner nor an admin.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
        model = self._get_model(assessment_id)
        ensure_owner_or_admin(caller, model.instructor_id)

        changes = req.model_dump(exclude_unset=True, exclude={"questions"})
        for field, value in changes.items():
            if value is None and field in ("title", "attempts", "is_active"):
                continue
            setattr(model, field, value)
        if req.questions is not None:
            model.questions = [q.model_dump() for q in req.questions]
            if compute_total_points(req.questions) != model.total_points:
                logger.warning(
                    "Assessment %s questions changed; total_points stays %d",
                    assessment_id,
                    model.total_points,
                )

        self.db.commit()
        logger.info("Updated assessment %s by %s", assessment_id, caller.user_id)
        return self.get_assessment(assessment_id)

    def delete_assessment(self, caller: User, assessment_id: str) -> None:
        """Delete an assessment. Its results are kept.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            ForbiddenError: If the caller is neither the owner nor an admin.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
        model = self._get_model(assessment_id)
        ensure_owner_or_admin(caller, model.instructor_id)
        self.db.delete(model)
        self.db.commit()
        logger.info("Deleted assessment %s by %s", assessment_id, caller.user_id)

    def count_assessments(self, instructor_id: str = None, course_id: str = None) -> int:
        query = self.db.query(AssessmentModel)
        if instructor_id:
            query = query.filter(AssessmentModel.instructor_id == instructor_id)
        if course_id:
            query = query.filter(AssessmentModel.course_id == course_id)
        return query.count()
