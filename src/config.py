"""Configuration module for the Learning Platform API.

This module provides centralized configuration management, including directory
paths, database settings, API server settings, authentication and grading
defaults. All configuration values can be overridden via environment variables.
"""

import os
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# --- Directory Configuration ---

# Root directory of the project
ROOT_DIR = Path(__file__).parent.parent.resolve()

# Data directory name
DATA_DIR_NAME = "data"
DATA_DIR = Path(os.getenv("DATA_DIR", str(ROOT_DIR / DATA_DIR_NAME)))

# --- Database Configuration ---

DATABASE_URL: str = os.getenv(
    "DATABASE_URL", f"sqlite:///{DATA_DIR}/learning_platform.db"
)

# Seconds a persistence call may wait (SQLite busy lock or pool checkout)
# before failing.
DB_TIMEOUT_SECONDS: float = float(os.getenv("DB_TIMEOUT_SECONDS", "10"))

# --- API Server Configuration ---

API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
API_PORT: int = int(os.getenv("API_PORT", "5000"))

# CORS allowed origins (comma-separated list)
# Default includes local development addresses. For production, set via
# CORS_ALLOWED_ORIGINS environment variable.
_CORS_ALLOWED_ORIGINS_STR: str = os.getenv(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000,"
    "http://127.0.0.1:3000",
)
CORS_ALLOWED_ORIGINS: List[str] = [
    origin.strip()
    for origin in _CORS_ALLOWED_ORIGINS_STR.split(",")
    if origin.strip()
]

# --- Logging Configuration ---

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# --- Authentication Configuration ---

JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", "change-me-in-production")
JWT_ALGORITHM: str = "HS256"

# Tokens are valid for 24 hours
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(
    os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))
)

# Bcrypt rounds for password hashing (higher = more secure but slower)
BCRYPT_ROUNDS: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

# Token that must accompany a self-registration with role "admin".
# When unset, admins can only be created by another admin.
ADMIN_REGISTRATION_TOKEN: Optional[str] = os.getenv("ADMIN_REGISTRATION_TOKEN")

# --- Roles ---

ROLE_STUDENT = "student"
ROLE_INSTRUCTOR = "instructor"
ROLE_ADMIN = "admin"
ROLES: List[str] = [ROLE_STUDENT, ROLE_INSTRUCTOR, ROLE_ADMIN]

# --- Assessment Configuration ---

# When false, a submission answering fewer questions than the assessment has
# is rejected instead of being graded on the answered subset.
ALLOW_PARTIAL_SUBMISSIONS: bool = (
    os.getenv("ALLOW_PARTIAL_SUBMISSIONS", "true").lower() == "true"
)

DEFAULT_QUESTION_POINTS: int = 1
DEFAULT_ASSESSMENT_ATTEMPTS: int = 1
