"""Dashboard analytics routes."""

from fastapi import APIRouter, Depends

from api.routes.auth import get_current_user
from core.dependencies import AnalyticsManagerDep
from schemas.analytics import (
    AdminAnalytics,
    CourseAnalytics,
    InstructorAnalytics,
    StudentAnalytics,
)
from schemas.user import User

router = APIRouter(prefix="/api/analytics", tags=["Analytics"])


@router.get("/admin", response_model=AdminAnalytics, summary="Platform totals")
def admin_analytics(
    analytics_manager: AnalyticsManagerDep,
    current_user: User = Depends(get_current_user),
) -> AdminAnalytics:
    return analytics_manager.admin_summary(current_user)


@router.get("/instructor", response_model=InstructorAnalytics, summary="My teaching totals")
def instructor_analytics(
    analytics_manager: AnalyticsManagerDep,
    current_user: User = Depends(get_current_user),
) -> InstructorAnalytics:
    return analytics_manager.instructor_summary(current_user)


@router.get("/user", response_model=StudentAnalytics, summary="My learning totals")
def student_analytics(
    analytics_manager: AnalyticsManagerDep,
    current_user: User = Depends(get_current_user),
) -> StudentAnalytics:
    return analytics_manager.student_summary(current_user)


@router.get("/course/{course_id}", response_model=CourseAnalytics, summary="Course totals")
def course_analytics(
    course_id: str,
    analytics_manager: AnalyticsManagerDep,
    current_user: User = Depends(get_current_user),
) -> CourseAnalytics:
    """Any authenticated user may read course totals."""
    return analytics_manager.course_summary(course_id)
