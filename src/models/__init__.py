"""Database models.

Importing this package registers every table with ``Base.metadata``.
"""

from .base import Base
from .user import UserModel
from .course import CourseModel
from .enrollment import EnrollmentModel
from .assessment import AssessmentModel
from .result import ResultModel

__all__ = [
    "Base",
    "UserModel",
    "CourseModel",
    "EnrollmentModel",
    "AssessmentModel",
    "ResultModel",
]
