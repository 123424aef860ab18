from datetime import timedelta

from api.routes.auth import create_access_token
from conftest import register
from schemas.user import User


def test_register_returns_token_and_user(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Sam", "email": "sam@school.edu", "password": "secret123"},
    )

    assert resp.status_code == 201
    body = resp.json()
    assert body["token"]
    assert body["user"]["role"] == "student"
    assert "password_hash" not in body["user"]


def test_duplicate_email_is_conflict(client, student):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "sam@school.edu", "password": "secret123"},
    )

    assert resp.status_code == 409
    assert resp.json()["kind"] == "conflict"


def test_email_is_case_insensitive(client, student):
    resp = client.post(
        "/api/auth/register",
        json={"name": "Again", "email": "Sam@School.edu", "password": "secret123"},
    )
    assert resp.status_code == 409

    resp = client.post(
        "/api/auth/login", json={"email": "SAM@school.edu", "password": "secret123"}
    )
    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "sam@school.edu"


def test_registered_email_is_stored_lower_case(client):
    _, info = register(client, "Mixed", "Mixed.Case@School.edu")
    assert info["email"] == "mixed.case@school.edu"


def test_admin_registration_requires_token(client):
    resp = client.post(
        "/api/auth/register",
        json={
            "name": "Mallory",
            "email": "mallory@school.edu",
            "password": "secret123",
            "role": "admin",
        },
    )

    assert resp.status_code == 403
    assert resp.json()["kind"] == "forbidden"


def test_invalid_role_is_validation_error(client):
    resp = client.post(
        "/api/auth/register",
        json={"name": "X", "email": "x@school.edu", "password": "secret123", "role": "root"},
    )

    assert resp.status_code == 422
    assert resp.json()["kind"] == "validation_error"


def test_login_with_valid_credentials(client, student):
    resp = client.post(
        "/api/auth/login", json={"email": "sam@school.edu", "password": "secret123"}
    )

    assert resp.status_code == 200
    assert resp.json()["user"]["email"] == "sam@school.edu"


def test_login_with_wrong_password(client, student):
    resp = client.post(
        "/api/auth/login", json={"email": "sam@school.edu", "password": "wrong-pass"}
    )

    assert resp.status_code == 401
    assert resp.json() == {"kind": "unauthenticated", "message": "Invalid credentials"}


def test_profile_requires_token(client):
    resp = client.get("/api/auth/profile")

    assert resp.status_code == 401
    assert resp.json()["kind"] == "unauthenticated"


def test_profile_rejects_garbage_token(client):
    resp = client.get("/api/auth/profile", headers={"Authorization": "Bearer not-a-jwt"})
    assert resp.status_code == 401


def test_profile_rejects_expired_token(client, student):
    _, info = student
    user = User(
        user_id=info["user_id"],
        name=info["name"],
        email=info["email"],
        password_hash="x",
        role=info["role"],
    )
    token = create_access_token(user, expires_delta=timedelta(minutes=-1))

    resp = client.get("/api/auth/profile", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401


def test_profile_lists_enrolled_courses(client, student, instructor):
    from conftest import create_course

    course = create_course(client, instructor[0])
    client.post(f"/api/courses/{course['course_id']}/enroll", headers=student[0])

    resp = client.get("/api/auth/profile", headers=student[0])

    assert resp.status_code == 200
    assert resp.json()["enrolled_courses"] == [course["course_id"]]


def test_token_of_deleted_user_is_rejected(client, admin):
    headers, info = register(client, "Temp", "temp@school.edu")
    client.delete(f"/api/users/{info['user_id']}", headers=admin[0])

    resp = client.get("/api/auth/profile", headers=headers)
    assert resp.status_code == 401
