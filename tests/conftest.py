"""Shared fixtures.

Configuration is read at import time, so the environment is set before any
application module is imported.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["DATA_DIR"] = tempfile.mkdtemp(prefix="learning-platform-")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["ADMIN_REGISTRATION_TOKEN"] = "test-admin-token"
os.environ["ALLOW_PARTIAL_SUBMISSIONS"] = "true"

import pytest
from fastapi.testclient import TestClient

from app import app
from core.database import SessionLocal, engine
from models.base import Base

ADMIN_TOKEN = "test-admin-token"


@pytest.fixture(autouse=True)
def reset_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


def register(client, name, email, role="student", password="secret123"):
    """Register a user and return (auth headers, user info)."""
    payload = {"name": name, "email": email, "password": password, "role": role}
    if role == "admin":
        payload["admin_token"] = ADMIN_TOKEN
    resp = client.post("/api/auth/register", json=payload)
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return {"Authorization": f"Bearer {body['token']}"}, body["user"]


@pytest.fixture
def student(client):
    return register(client, "Sam Student", "sam@school.edu")


@pytest.fixture
def other_student(client):
    return register(client, "Alex Student", "alex@school.edu")


@pytest.fixture
def instructor(client):
    return register(client, "Ivy Instructor", "ivy@school.edu", role="instructor")


@pytest.fixture
def other_instructor(client):
    return register(client, "Oscar Instructor", "oscar@school.edu", role="instructor")


@pytest.fixture
def admin(client):
    return register(client, "Ada Admin", "ada@school.edu", role="admin")


def create_course(client, headers, **overrides):
    payload = {
        "title": "Intro to Python",
        "description": "Variables, loops and functions.",
        "category": "Programming",
        "difficulty": "beginner",
    }
    payload.update(overrides)
    resp = client.post("/api/courses", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()


SAMPLE_QUESTIONS = [
    {
        "question": "Which letter comes first?",
        "type": "multiple-choice",
        "options": ["A", "B", "C", "D"],
        "correct_answer": "A",
        "points": 10,
    },
    {
        "question": "Python is dynamically typed.",
        "type": "true-false",
        "correct_answer": "true",
        "points": 5,
    },
]


def create_assessment(client, headers, course_id, questions=None, **overrides):
    payload = {
        "title": "Quiz 1",
        "course_id": course_id,
        "questions": questions if questions is not None else SAMPLE_QUESTIONS,
    }
    payload.update(overrides)
    resp = client.post("/api/assessments", json=payload, headers=headers)
    assert resp.status_code == 201, resp.text
    return resp.json()
