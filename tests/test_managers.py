import pytest

from conftest import SAMPLE_QUESTIONS
from core.exceptions import (
    AlreadyEnrolledError,
    AttemptLimitError,
    CourseFullError,
    ForbiddenError,
    UnauthenticatedError,
    ValidationError,
)
from schemas.assessment import AssessmentCreate
from schemas.course import CourseCreate
from utils.assessment_manager import AssessmentManager
from utils.course_manager import CourseManager
from utils.enrollment_manager import EnrollmentManager
from utils.result_manager import ResultManager
from utils.user_manager import UserManager


@pytest.fixture
def users(db):
    manager = UserManager(db)
    return {
        "instructor": manager.create_user("Tess", "tess@school.edu", "secret123", "instructor"),
        "alice": manager.create_user("Alice", "alice@school.edu", "secret123", "student"),
        "bob": manager.create_user("Bob", "bob@school.edu", "secret123", "student"),
    }


@pytest.fixture
def course(db, users):
    req = CourseCreate(title="Algebra", description="Linear equations", max_enrollments=1)
    return CourseManager(db).create_course(users["instructor"], req)


def test_passwords_are_hashed(db, users):
    manager = UserManager(db)
    assert users["alice"].password_hash != "secret123"
    assert manager.authenticate("alice@school.edu", "secret123").user_id == users["alice"].user_id
    with pytest.raises(UnauthenticatedError):
        manager.authenticate("alice@school.edu", "nope")
    with pytest.raises(UnauthenticatedError):
        manager.authenticate("nobody@school.edu", "secret123")


def test_enrollment_conflicts(db, users, course):
    enrollments = EnrollmentManager(db)
    enrollments.enroll(users["alice"], course.course_id)

    with pytest.raises(AlreadyEnrolledError):
        enrollments.enroll(users["alice"], course.course_id)
    with pytest.raises(CourseFullError) as excinfo:
        enrollments.enroll(users["bob"], course.course_id)

    assert excinfo.value.kind == "capacity"
    assert enrollments.list_roster(course.course_id) == [users["alice"].user_id]
    assert enrollments.list_enrolled_course_ids(users["bob"].user_id) == []


def test_partial_submission_rejected_when_disabled(db, users, course):
    EnrollmentManager(db).enroll(users["alice"], course.course_id)
    assessment = AssessmentManager(db).create_assessment(
        users["instructor"],
        AssessmentCreate(title="Quiz", course_id=course.course_id, questions=SAMPLE_QUESTIONS),
    )
    strict = ResultManager(db, allow_partial=False)

    with pytest.raises(ValidationError):
        strict.submit(users["alice"], assessment.assessment_id, ["A"])

    # A rejected submission does not use up the attempt
    result = strict.submit(users["alice"], assessment.assessment_id, ["A", True])
    assert result.score == 15

    with pytest.raises(AttemptLimitError) as excinfo:
        strict.submit(users["alice"], assessment.assessment_id, ["A", True])
    assert excinfo.value.status_code == 409


def test_students_cannot_create_courses(db, users):
    with pytest.raises(ForbiddenError):
        CourseManager(db).create_course(
            users["alice"], CourseCreate(title="Mine", description="Not allowed")
        )
