from types import SimpleNamespace

import pytest

from core.exceptions import ForbiddenError
from core.permissions import can_mutate, can_see_answers, ensure_owner_or_admin, ensure_role
from schemas.user import User


def make_user(role, user_id=None):
    kwargs = {"name": role.title(), "email": f"{role}@school.edu", "password_hash": "x", "role": role}
    if user_id:
        kwargs["user_id"] = user_id
    return User(**kwargs)


def test_ensure_role_allows_listed_roles():
    ensure_role(make_user("instructor"), ["instructor", "admin"])


@pytest.mark.parametrize("role", ["student", "instructor"])
def test_ensure_role_rejects_other_roles(role):
    with pytest.raises(ForbiddenError):
        ensure_role(make_user(role), ["admin"])


def test_owner_can_mutate_own_resource():
    owner = make_user("instructor", user_id="owner-1")
    assert can_mutate(owner, "owner-1")
    ensure_owner_or_admin(owner, "owner-1")


def test_instructor_cannot_mutate_someone_elses_resource():
    other = make_user("instructor", user_id="other-1")
    assert not can_mutate(other, "owner-1")
    with pytest.raises(ForbiddenError):
        ensure_owner_or_admin(other, "owner-1")


def test_admin_can_mutate_anything():
    assert can_mutate(make_user("admin"), "owner-1")


def test_students_never_see_answers():
    student = make_user("student", user_id="s-1")
    assessment = SimpleNamespace(instructor_id="s-1")
    assert not can_see_answers(student, assessment)


def test_owner_and_admin_see_answers():
    assessment = SimpleNamespace(instructor_id="owner-1")
    assert can_see_answers(make_user("instructor", user_id="owner-1"), assessment)
    assert can_see_answers(make_user("admin"), assessment)
    assert not can_see_answers(make_user("instructor", user_id="other"), assessment)
