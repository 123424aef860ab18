"""Dependency injection module for FastAPI.

Every manager is built per request around the request-scoped DB session, so
no operation reads persistence or identity from global state.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from core.database import get_db
from utils import analytics_manager
from utils import assessment_manager
from utils import course_manager
from utils import enrollment_manager
from utils import result_manager
from utils import user_manager


def get_user_manager(db: Session = Depends(get_db)) -> user_manager.UserManager:
    """Get UserManager instance with request-scoped DB session.

    Args:
        db: Database session.

    Returns:
        UserManager instance.
    """
    return user_manager.UserManager(db)


def get_course_manager(db: Session = Depends(get_db)) -> course_manager.CourseManager:
    """Get CourseManager instance with request-scoped DB session."""
    return course_manager.CourseManager(db)


def get_enrollment_manager(
    db: Session = Depends(get_db),
) -> enrollment_manager.EnrollmentManager:
    """Get EnrollmentManager instance with request-scoped DB session."""
    return enrollment_manager.EnrollmentManager(db)


def get_assessment_manager(
    db: Session = Depends(get_db),
) -> assessment_manager.AssessmentManager:
    """Get AssessmentManager instance with request-scoped DB session."""
    return assessment_manager.AssessmentManager(db)


def get_result_manager(db: Session = Depends(get_db)) -> result_manager.ResultManager:
    """Get ResultManager instance with request-scoped DB session."""
    return result_manager.ResultManager(db)


def get_analytics_manager(
    db: Session = Depends(get_db),
) -> analytics_manager.AnalyticsManager:
    """Get AnalyticsManager instance with request-scoped DB session."""
    return analytics_manager.AnalyticsManager(db)


# Type aliases for dependency injection
UserManagerDep = Annotated[user_manager.UserManager, Depends(get_user_manager)]
CourseManagerDep = Annotated[course_manager.CourseManager, Depends(get_course_manager)]
EnrollmentManagerDep = Annotated[
    enrollment_manager.EnrollmentManager, Depends(get_enrollment_manager)
]
AssessmentManagerDep = Annotated[
    assessment_manager.AssessmentManager, Depends(get_assessment_manager)
]
ResultManagerDep = Annotated[result_manager.ResultManager, Depends(get_result_manager)]
AnalyticsManagerDep = Annotated[
    analytics_manager.AnalyticsManager, Depends(get_analytics_manager)
]
