"""Aggregate statistics for the role dashboards.

Every value is derived from stored data. Metrics the platform has no data
for (ratings, completion) are returned as None.
"""

import logging
from typing import Sequence

from sqlalchemy.orm import Session

from config import ROLE_ADMIN, ROLE_INSTRUCTOR, ROLE_STUDENT
from core.permissions import ensure_role
from schemas.analytics import (
    AdminAnalytics,
    CourseAnalytics,
    CoursePerformance,
    InstructorAnalytics,
    ResultProgress,
    StudentAnalytics,
    StudentScore,
)
from schemas.user import User
from utils.assessment_manager import AssessmentManager
from utils.course_manager import CourseManager
from utils.enrollment_manager import EnrollmentManager
from utils.grading import calculate_percentage
from utils.result_manager import ResultManager
from utils.user_manager import UserManager

logger = logging.getLogger(__name__)


def average_percentage(percentages: Sequence[int]) -> int:
    """Mean of result percentages, rounded half-up; 0 for no results."""
    if not percentages:
        return 0
    return calculate_percentage(sum(percentages), len(percentages) * 100)


class AnalyticsManager:
    """Builds the admin, instructor, student and course summaries."""

    def __init__(self, db: Session):
        self.db = db
        self.users = UserManager(db)
        self.courses = CourseManager(db)
        self.enrollments = EnrollmentManager(db)
        self.assessments = AssessmentManager(db)
        self.results = ResultManager(db)

    def admin_summary(self, caller: User) -> AdminAnalytics:
        ensure_role(caller, [ROLE_ADMIN], "Insufficient permissions")
        return AdminAnalytics(
            total_users=self.users.count_users(),
            total_courses=self.courses.count_courses(),
            total_assessments=self.assessments.count_assessments(),
            total_students=self.users.count_users(ROLE_STUDENT),
            total_instructors=self.users.count_users(ROLE_INSTRUCTOR),
            total_enrollments=self.enrollments.count_enrollments(),
            total_results=self.results.count_results(),
        )

    def instructor_summary(self, caller: User) -> InstructorAnalytics:
        ensure_role(caller, [ROLE_INSTRUCTOR], "Insufficient permissions")
        courses = self.courses.list_instructor_courses(caller.user_id)
        performance = [
            CoursePerformance(
                course_id=course.course_id,
                name=course.title,
                enrollments=len(course.enrolled_students),
            )
            for course in courses
        ]
        return InstructorAnalytics(
            total_courses=len(courses),
            total_enrollments=sum(p.enrollments for p in performance),
            total_assessments=self.assessments.count_assessments(
                instructor_id=caller.user_id
            ),
            average_rating=None,
            course_performance=performance,
        )

    def student_summary(self, caller: User) -> StudentAnalytics:
        ensure_role(caller, [ROLE_STUDENT], "Insufficient permissions")
        results = self.results.list_student_results(caller.user_id)
        return StudentAnalytics(
            enrolled_courses=len(
                self.enrollments.list_enrolled_course_ids(caller.user_id)
            ),
            completed_assessments=len(results),
            average_score=average_percentage([r.percentage for r in results]),
            total_study_time=sum(r.time_spent or 0 for r in results),
            progress=[
                ResultProgress(
                    course_id=r.course_id,
                    assessment_id=r.assessment_id,
                    score=r.percentage,
                )
                for r in results
            ],
        )

    def course_summary(self, course_id: str) -> CourseAnalytics:
        """Summary of one course.

        Raises:
            CourseNotFoundError: If the course does not exist.
        """
        course = self.courses.get_course(course_id)
        results = self.results.list_course_results(course_id)
        return CourseAnalytics(
            course_id=course.course_id,
            enrollments=len(course.enrolled_students),
            assessments=self.assessments.count_assessments(course_id=course_id),
            average_score=average_percentage([r.percentage for r in results]),
            completion_rate=None,
            student_progress=[
                StudentScore(student_id=r.student_id, score=r.percentage)
                for r in results
            ],
        )
