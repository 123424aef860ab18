"""Course catalog and enrollment routes.

Listing and reading courses is public; everything else requires a token.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_user
from config import ROLE_ADMIN, ROLE_INSTRUCTOR
from core.dependencies import (
    AssessmentManagerDep,
    CourseManagerDep,
    EnrollmentManagerDep,
)
from core.permissions import can_see_answers, ensure_role
from schemas.assessment import Assessment, StudentAssessment
from schemas.course import Course, CourseCreate, CourseUpdate, EnrollResponse
from schemas.user import User
from utils.converters import assessment_to_student_view

router = APIRouter(prefix="/api/courses", tags=["Course"])


@router.get("", response_model=List[Course], summary="List all courses")
def list_courses(course_manager: CourseManagerDep) -> List[Course]:
    return course_manager.list_courses()


@router.get("/enrolled", response_model=List[Course], summary="Courses I am enrolled in")
def list_enrolled_courses(
    enrollment_manager: EnrollmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Course]:
    return enrollment_manager.list_enrolled_courses(current_user.user_id)


@router.get("/instructor", response_model=List[Course], summary="Courses I teach")
def list_instructor_courses(
    course_manager: CourseManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Course]:
    ensure_role(current_user, [ROLE_INSTRUCTOR, ROLE_ADMIN], "Insufficient permissions")
    return course_manager.list_instructor_courses(current_user.user_id)


@router.get("/{course_id}", response_model=Course, summary="Get a course")
def get_course(course_id: str, course_manager: CourseManagerDep) -> Course:
    return course_manager.get_course(course_id)


@router.post(
    "",
    response_model=Course,
    status_code=status.HTTP_201_CREATED,
    summary="Create a course",
)
def create_course(
    req: CourseCreate,
    course_manager: CourseManagerDep,
    current_user: User = Depends(get_current_user),
) -> Course:
    return course_manager.create_course(current_user, req)


@router.put("/{course_id}", response_model=Course, summary="Update a course")
def update_course(
    course_id: str,
    req: CourseUpdate,
    course_manager: CourseManagerDep,
    current_user: User = Depends(get_current_user),
) -> Course:
    return course_manager.update_course(current_user, course_id, req)


@router.delete("/{course_id}", summary="Delete a course")
def delete_course(
    course_id: str,
    course_manager: CourseManagerDep,
    current_user: User = Depends(get_current_user),
) -> dict:
    course_manager.delete_course(current_user, course_id)
    return {"success": True, "message": "Course deleted successfully"}


@router.post("/{course_id}/enroll", response_model=EnrollResponse, summary="Enroll in a course")
def enroll(
    course_id: str,
    enrollment_manager: EnrollmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> EnrollResponse:
    enrollment = enrollment_manager.enroll(current_user, course_id)
    return EnrollResponse(
        message="Enrolled successfully",
        course_id=enrollment.course_id,
        enrolled_at=enrollment.enrolled_at,
    )


@router.get(
    "/{course_id}/assessments",
    response_model=List[Union[Assessment, StudentAssessment]],
    summary="Active assessments of a course",
)
def list_course_assessments(
    course_id: str,
    assessment_manager: AssessmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> list:
    """List active assessments; correct answers are hidden from non-owners."""
    assessments = assessment_manager.list_course_assessments(course_id)
    return [
        a if can_see_answers(current_user, a) else assessment_to_student_view(a)
        for a in assessments
    ]
