"""Assessment routes.

This module handles HTTP endpoints for creating, reading and submitting
assessments, and for reading graded results.
"""

from typing import List, Union

from fastapi import APIRouter, Depends, status

from api.routes.auth import get_current_user
from config import ROLE_STUDENT
from core.dependencies import AssessmentManagerDep, ResultManagerDep
from core.permissions import can_see_answers, ensure_role
from schemas.assessment import (
    Assessment,
    AssessmentCreate,
    AssessmentUpdate,
    StudentAssessment,
)
from schemas.result import Result, SubmitAssessmentRequest
from schemas.user import User
from utils.converters import assessment_to_student_view

router = APIRouter(prefix="/api/assessments", tags=["Assessment"])


@router.post(
    "",
    response_model=Assessment,
    status_code=status.HTTP_201_CREATED,
    summary="Create an assessment",
)
def create_assessment(
    req: AssessmentCreate,
    assessment_manager: AssessmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Assessment:
    """Create an assessment for a course owned by the caller.

    Args:
        req: Assessment fields, including the question list.
        assessment_manager: Injected AssessmentManager instance.
        current_user: Current authenticated user.

    Returns:
        The created assessment with its computed total_points.
    """
    return assessment_manager.create_assessment(current_user, req)


@router.get(
    "/results/student",
    response_model=List[Result],
    summary="My assessment results",
)
def list_my_results(
    result_manager: ResultManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Result]:
    ensure_role(current_user, [ROLE_STUDENT], "Insufficient permissions")
    return result_manager.list_student_results(current_user.user_id)


@router.get(
    "/{assessment_id}",
    response_model=Union[Assessment, StudentAssessment],
    summary="Get an assessment",
)
def get_assessment(
    assessment_id: str,
    assessment_manager: AssessmentManagerDep,
    current_user: User = Depends(get_current_user),
):
    """Get an assessment.

    Owners and admins see correct answers; everyone else gets the questions
    without them.
    """
    assessment = assessment_manager.get_assessment(assessment_id)
    if can_see_answers(current_user, assessment):
        return assessment
    return assessment_to_student_view(assessment)


@router.put("/{assessment_id}", response_model=Assessment, summary="Update an assessment")
def update_assessment(
    assessment_id: str,
    req: AssessmentUpdate,
    assessment_manager: AssessmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> Assessment:
    return assessment_manager.update_assessment(current_user, assessment_id, req)


@router.delete("/{assessment_id}", summary="Delete an assessment")
def delete_assessment(
    assessment_id: str,
    assessment_manager: AssessmentManagerDep,
    current_user: User = Depends(get_current_user),
) -> dict:
    assessment_manager.delete_assessment(current_user, assessment_id)
    return {"success": True, "message": "Assessment deleted successfully"}


@router.post(
    "/{assessment_id}/submit",
    response_model=Result,
    status_code=status.HTTP_201_CREATED,
    summary="Submit answers for grading",
)
def submit_assessment(
    assessment_id: str,
    req: SubmitAssessmentRequest,
    result_manager: ResultManagerDep,
    current_user: User = Depends(get_current_user),
) -> Result:
    """Grade a submission and store the result.

    Args:
        assessment_id: Assessment being answered.
        req: Answers in question order and time spent.
        result_manager: Injected ResultManager instance.
        current_user: Current authenticated student.

    Returns:
        The graded Result.
    """
    return result_manager.submit(
        current_user,
        assessment_id,
        [a.answer for a in req.answers],
        time_spent=req.time_spent,
    )


@router.get(
    "/{assessment_id}/results",
    response_model=List[Result],
    summary="Results of an assessment",
)
def list_assessment_results(
    assessment_id: str,
    result_manager: ResultManagerDep,
    current_user: User = Depends(get_current_user),
) -> List[Result]:
    return result_manager.list_assessment_results(current_user, assessment_id)
