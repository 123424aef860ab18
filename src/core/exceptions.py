"""Custom exception classes for the Learning Platform API.

This module defines the application's error taxonomy. Every exception carries
a machine-readable ``kind`` and the HTTP status the API boundary reports it
with, so managers can raise domain errors without knowing about HTTP.
"""


class LearningPlatformError(Exception):
    """Base exception for all Learning Platform errors."""

    kind = "error"
    status_code = 400

    def __init__(self, message: str = ""):
        """Initialize the exception.

        Args:
            message: Human readable description returned to the client.
        """
        self.message = message or self.__class__.__doc__.strip()
        super().__init__(self.message)


class ValidationError(LearningPlatformError):
    """Raised when data validation fails."""

    kind = "validation_error"
    status_code = 422


class NotFoundError(LearningPlatformError):
    """Raised when a referenced entity does not exist."""

    kind = "not_found"
    status_code = 404


class UserNotFoundError(NotFoundError):
    """Raised when a requested user cannot be found."""

    def __init__(self, user_id: str):
        self.user_id = user_id
        super().__init__(f"User '{user_id}' not found")


class CourseNotFoundError(NotFoundError):
    """Raised when a requested course cannot be found."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__(f"Course '{course_id}' not found")


class AssessmentNotFoundError(NotFoundError):
    """Raised when a requested assessment cannot be found."""

    def __init__(self, assessment_id: str):
        self.assessment_id = assessment_id
        super().__init__(f"Assessment '{assessment_id}' not found")


class UnauthenticatedError(LearningPlatformError):
    """Raised when a request carries no valid credential."""

    kind = "unauthenticated"
    status_code = 401


class ForbiddenError(LearningPlatformError):
    """Raised when an authenticated user is not permitted to act."""

    kind = "forbidden"
    status_code = 403


class ConflictError(LearningPlatformError):
    """Raised when an operation conflicts with existing state."""

    kind = "conflict"
    status_code = 409


class UserAlreadyExistsError(ConflictError):
    """Raised when registering an email that is already taken."""

    def __init__(self, email: str):
        self.email = email
        super().__init__(f"User '{email}' already exists")


class AlreadyEnrolledError(ConflictError):
    """Raised when a student enrolls in a course twice."""

    def __init__(self, course_id: str):
        self.course_id = course_id
        super().__init__("Already enrolled in this course")


class CapacityError(LearningPlatformError):
    """Raised when a capacity limit would be exceeded."""

    kind = "capacity"
    status_code = 409


class CourseFullError(CapacityError):
    """Raised when a course roster has reached its enrollment cap."""

    def __init__(self, course_id: str, max_enrollments: int):
        self.course_id = course_id
        self.max_enrollments = max_enrollments
        super().__init__(
            f"Course '{course_id}' is full ({max_enrollments} students)"
        )


class AttemptLimitError(LearningPlatformError):
    """Raised when a student has used all attempts of an assessment."""

    kind = "attempt_limit"
    status_code = 409

    def __init__(self, assessment_id: str, attempts: int):
        self.assessment_id = assessment_id
        self.attempts = attempts
        super().__init__(
            f"Attempt limit reached for assessment '{assessment_id}' "
            f"({attempts} allowed)"
        )
