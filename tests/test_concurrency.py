"""Concurrent enrollments and submissions on a file-backed SQLite database.

Each thread gets its own session, as concurrent requests do. A barrier holds
both threads right after their first capacity or attempt check, so both pass
it before either one writes.
"""

import threading

import pytest
from sqlalchemy.orm import sessionmaker

from conftest import SAMPLE_QUESTIONS
from core.database import create_db_engine
from core.exceptions import AttemptLimitError, CourseFullError
from models.base import Base
from models.enrollment import EnrollmentModel
from models.result import ResultModel
from schemas.assessment import AssessmentCreate
from schemas.course import CourseCreate
from utils.assessment_manager import AssessmentManager
from utils.course_manager import CourseManager
from utils.enrollment_manager import EnrollmentManager
from utils.result_manager import ResultManager
from utils.user_manager import UserManager


@pytest.fixture
def make_session(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'concurrent.db'}")
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autocommit=False, autoflush=False, bind=engine)
    engine.dispose()


def hold_after_first_call(monkeypatch, cls, name, barrier):
    """Make each thread wait at the barrier after its first call to cls.name."""
    original = getattr(cls, name)
    seen = threading.local()

    def wrapper(self, *args, **kwargs):
        result = original(self, *args, **kwargs)
        if not getattr(seen, "called", False):
            seen.called = True
            barrier.wait(timeout=5)
        return result

    monkeypatch.setattr(cls, name, wrapper)


def run_in_threads(make_session, *calls):
    """Run each call(session) in its own thread and return raised exceptions."""
    errors = []

    def run(call):
        session = make_session()
        try:
            call(session)
        except Exception as e:
            errors.append(e)
        finally:
            session.close()

    threads = [threading.Thread(target=run, args=(call,)) for call in calls]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=30)
    return errors


def test_concurrent_enrollments_respect_capacity(make_session, monkeypatch):
    with make_session() as db:
        users = UserManager(db)
        owner = users.create_user("Tess", "tess@school.edu", "secret123", "instructor")
        alice = users.create_user("Alice", "alice@school.edu", "secret123", "student")
        bob = users.create_user("Bob", "bob@school.edu", "secret123", "student")
        course = CourseManager(db).create_course(
            owner, CourseCreate(title="Algebra", description="Equations", max_enrollments=1)
        )

    hold_after_first_call(monkeypatch, EnrollmentManager, "roster_size", threading.Barrier(2))

    errors = run_in_threads(
        make_session,
        lambda s: EnrollmentManager(s).enroll(alice, course.course_id),
        lambda s: EnrollmentManager(s).enroll(bob, course.course_id),
    )

    assert [type(e) for e in errors] == [CourseFullError]
    with make_session() as db:
        roster = db.query(EnrollmentModel).filter(
            EnrollmentModel.course_id == course.course_id
        )
        assert roster.count() == 1


def test_concurrent_submissions_respect_attempt_limit(make_session, monkeypatch):
    with make_session() as db:
        users = UserManager(db)
        owner = users.create_user("Tess", "tess@school.edu", "secret123", "instructor")
        alice = users.create_user("Alice", "alice@school.edu", "secret123", "student")
        course = CourseManager(db).create_course(
            owner, CourseCreate(title="Algebra", description="Equations")
        )
        EnrollmentManager(db).enroll(alice, course.course_id)
        quiz = AssessmentManager(db).create_assessment(
            owner,
            AssessmentCreate(title="Quiz", course_id=course.course_id, questions=SAMPLE_QUESTIONS),
        )
    assert quiz.attempts == 1

    hold_after_first_call(monkeypatch, ResultManager, "count_attempts", threading.Barrier(2))

    def submit(session):
        ResultManager(session).submit(alice, quiz.assessment_id, ["A", True])

    errors = run_in_threads(make_session, submit, submit)

    assert [type(e) for e in errors] == [AttemptLimitError]
    with make_session() as db:
        stored = db.query(ResultModel).filter(
            ResultModel.assessment_id == quiz.assessment_id
        )
        assert stored.count() == 1
