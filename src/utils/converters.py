"""Conversions between ORM models and pydantic schemas."""

from typing import List, Optional

from models.assessment import AssessmentModel
from models.course import CourseModel
from models.result import ResultModel
from models.user import UserModel
from schemas.assessment import (
    Assessment,
    QuestionList,
    QuestionPrompt,
    StudentAssessment,
)
from schemas.course import Course
from schemas.result import Result
from schemas.user import User, UserInfo


def user_to_model(user: User) -> UserModel:
    return UserModel(
        user_id=user.user_id,
        name=user.name,
        email=user.email,
        password_hash=user.password_hash,
        role=user.role,
        created_at=user.created_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        user_id=model.user_id,
        name=model.name,
        email=model.email,
        password_hash=model.password_hash,
        role=model.role,
        created_at=model.created_at,
    )


def user_to_info(user: User, enrolled_courses: Optional[List[str]] = None) -> UserInfo:
    """Strip the password hash from a user for client responses."""
    user_dict = user.model_dump()
    user_dict.pop("password_hash", None)
    return UserInfo(**user_dict, enrolled_courses=enrolled_courses or [])


def model_to_course(model: CourseModel) -> Course:
    return Course(
        course_id=model.course_id,
        title=model.title,
        description=model.description,
        instructor_id=model.instructor_id,
        instructor_name=model.instructor_name,
        category=model.category,
        difficulty=model.difficulty,
        duration=model.duration,
        price=model.price,
        image=model.image,
        materials=model.materials or [],
        max_enrollments=model.max_enrollments,
        enrolled_students=[e.student_id for e in model.enrollments],
        created_at=model.created_at,
    )


def model_to_assessment(
    model: AssessmentModel, course_title: Optional[str] = None
) -> Assessment:
    return Assessment(
        assessment_id=model.assessment_id,
        title=model.title,
        description=model.description,
        course_id=model.course_id,
        course_title=course_title,
        instructor_id=model.instructor_id,
        questions=QuestionList.validate_python(model.questions or []),
        total_points=model.total_points,
        time_limit=model.time_limit,
        attempts=model.attempts,
        is_active=model.is_active,
        created_at=model.created_at,
    )


def assessment_to_student_view(assessment: Assessment) -> StudentAssessment:
    """Hide correct answers from an assessment shown to a student."""
    return StudentAssessment(
        assessment_id=assessment.assessment_id,
        title=assessment.title,
        description=assessment.description,
        course_id=assessment.course_id,
        course_title=assessment.course_title,
        questions=[
            QuestionPrompt(
                question=q.question,
                type=q.type,
                options=getattr(q, "options", []),
                points=q.points,
            )
            for q in assessment.questions
        ],
        total_points=assessment.total_points,
        time_limit=assessment.time_limit,
        attempts=assessment.attempts,
        is_active=assessment.is_active,
        created_at=assessment.created_at,
    )


def model_to_result(
    model: ResultModel,
    assessment_title: Optional[str] = None,
    course_title: Optional[str] = None,
) -> Result:
    return Result(
        result_id=model.result_id,
        student_id=model.student_id,
        assessment_id=model.assessment_id,
        course_id=model.course_id,
        answers=model.answers or [],
        score=model.score,
        total_points=model.total_points,
        percentage=model.percentage,
        time_spent=model.time_spent,
        submitted_at=model.submitted_at,
        assessment_title=assessment_title,
        course_title=course_title,
    )
