from fastapi.testclient import TestClient

from app import app
from core.dependencies import get_course_manager


class BrokenCourseManager:
    def list_courses(self):
        raise RuntimeError("database exploded")


def test_unexpected_errors_are_generic_server_errors():
    app.dependency_overrides[get_course_manager] = BrokenCourseManager
    try:
        client = TestClient(app, raise_server_exceptions=False)
        resp = client.get("/api/courses")
    finally:
        app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"kind": "server_error", "message": "Server error"}


def test_unknown_route_uses_error_shape(client):
    resp = client.get("/api/nowhere")

    assert resp.status_code == 404
    assert resp.json()["kind"] == "not_found"


def test_wrong_method_uses_error_shape(client):
    resp = client.patch("/api/courses")
    assert resp.status_code == 405
    assert resp.json()["kind"] == "method_not_allowed"


def test_malformed_body_is_validation_error(client, student):
    resp = client.post(
        "/api/auth/login", content="not json", headers={"Content-Type": "application/json"}
    )

    assert resp.status_code == 422
    body = resp.json()
    assert body["kind"] == "validation_error"
    assert body["message"]


def test_health(client):
    assert client.get("/api/health").json()["status"] == "ok"
