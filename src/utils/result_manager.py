"""Submission and result management.

This module connects the grading engine to persistence: it checks that a
student may submit, grades the answers and stores exactly one immutable
result per attempt.
"""

import logging
import uuid
from datetime import datetime
from typing import List, Optional

import pytz
from sqlalchemy.orm import Session

from config import ALLOW_PARTIAL_SUBMISSIONS, ROLE_ADMIN, ROLE_INSTRUCTOR, ROLE_STUDENT
from core.exceptions import AttemptLimitError, ForbiddenError
from core.permissions import ensure_owner_or_admin, ensure_role
from models.assessment import AssessmentModel
from models.course import CourseModel
from models.result import ResultModel
from schemas.result import AnswerValue, Result
from schemas.user import User
from utils.assessment_manager import AssessmentManager
from utils.converters import model_to_result
from utils.enrollment_manager import EnrollmentManager
from utils.grading import grade_submission

logger = logging.getLogger(__name__)


class ResultManager:
    """Grades submissions and reads stored results."""

    def __init__(self, db: Session, allow_partial: bool = ALLOW_PARTIAL_SUBMISSIONS):
        """Initialize ResultManager.

        Args:
            db: SQLAlchemy Session.
            allow_partial: Whether submissions may leave questions unanswered.
        """
        self.db = db
        self.allow_partial = allow_partial
        self.assessments = AssessmentManager(db)
        self.enrollments = EnrollmentManager(db)

    def count_attempts(self, student_id: str, assessment_id: str) -> int:
        return (
            self.db.query(ResultModel)
            .filter(
                ResultModel.student_id == student_id,
                ResultModel.assessment_id == assessment_id,
            )
            .count()
        )

    def submit(
        self,
        student: User,
        assessment_id: str,
        answers: List[Optional[AnswerValue]],
        time_spent: Optional[float] = None,
    ) -> Result:
        """Grade a submission and persist its result.

        Args:
            student: Authenticated student.
            assessment_id: Assessment being answered.
            answers: Answers in question order; None marks an unanswered question.
            time_spent: Minutes spent, as reported by the client.

        Returns:
            The stored Result.

        Raises:
            ForbiddenError: If the caller is not a student, the assessment is
                inactive, or the student is not enrolled in its course.
            AssessmentNotFoundError: If the assessment does not exist.
            AttemptLimitError: If every allowed attempt has been used.
            ValidationError: If the answers cannot be graded.
        """
        ensure_role(student, [ROLE_STUDENT], "Only students can submit assessments")
        assessment = self.assessments.get_assessment(assessment_id)

        if not assessment.is_active:
            raise ForbiddenError("Assessment is not accepting submissions")
        if not self.enrollments.is_enrolled(student.user_id, assessment.course_id):
            raise ForbiddenError("Enroll in the course before taking its assessments")
        if self.count_attempts(student.user_id, assessment_id) >= assessment.attempts:
            raise AttemptLimitError(assessment_id, assessment.attempts)

        outcome = grade_submission(
            assessment.questions,
            assessment.total_points,
            answers,
            allow_partial=self.allow_partial,
        )

        model = ResultModel(
            result_id=str(uuid.uuid4()),
            student_id=student.user_id,
            assessment_id=assessment_id,
            course_id=assessment.course_id,
            answers=[a.model_dump() for a in outcome.answers],
            score=outcome.score,
            total_points=outcome.total_points,
            percentage=outcome.percentage,
            time_spent=time_spent,
            submitted_at=datetime.now(pytz.utc).isoformat(),
        )
        # The flush takes the write lock on SQLite; a concurrent attempt that
        # passed the first check is caught by the second count
        self.db.add(model)
        self.db.flush()
        if self.count_attempts(student.user_id, assessment_id) > assessment.attempts:
            self.db.rollback()
            raise AttemptLimitError(assessment_id, assessment.attempts)
        self.db.commit()
        logger.info(
            "Graded assessment %s for student %s: %d/%d (%d%%)",
            assessment_id,
            student.user_id,
            outcome.score,
            outcome.total_points,
            outcome.percentage,
        )
        return model_to_result(model, assessment.title, assessment.course_title)

    def _with_titles(self, query) -> List[Result]:
        rows = (
            query.outerjoin(
                AssessmentModel,
                AssessmentModel.assessment_id == ResultModel.assessment_id,
            )
            .outerjoin(CourseModel, CourseModel.course_id == ResultModel.course_id)
            .add_columns(AssessmentModel.title, CourseModel.title)
            .order_by(ResultModel.submitted_at)
            .all()
        )
        return [
            model_to_result(model, assessment_title, course_title)
            for model, assessment_title, course_title in rows
        ]

    def list_student_results(self, student_id: str) -> List[Result]:
        """All results of one student, oldest first."""
        query = self.db.query(ResultModel).filter(ResultModel.student_id == student_id)
        return self._with_titles(query)

    def list_assessment_results(self, caller: User, assessment_id: str) -> List[Result]:
        """All results of one assessment, for its owner or an admin.

        Raises:
            AssessmentNotFoundError: If the assessment does not exist.
            ForbiddenError: If the caller is neither the owner nor an admin.
        """
        ensure_role(caller, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
        assessment = self.assessments.get_assessment(assessment_id)
        ensure_owner_or_admin(caller, assessment.instructor_id)
        query = self.db.query(ResultModel).filter(
            ResultModel.assessment_id == assessment_id
        )
        return self._with_titles(query)

    def list_course_results(self, course_id: str) -> List[ResultModel]:
        return (
            self.db.query(ResultModel)
            .filter(ResultModel.course_id == course_id)
            .order_by(ResultModel.submitted_at)
            .all()
        )

    def count_results(self) -> int:
        return self.db.query(ResultModel).count()
