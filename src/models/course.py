"""Course database model."""

from sqlalchemy import Column, Float, Integer, JSON, String, Text
from sqlalchemy.orm import relationship

from .base import Base


class CourseModel(Base):
    __tablename__ = "courses"

    course_id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=False)
    instructor_id = Column(String, index=True, nullable=False)
    instructor_name = Column(String, nullable=True)
    category = Column(String, nullable=True)
    difficulty = Column(String, nullable=False, default="beginner")
    duration = Column(String, nullable=True)
    price = Column(Float, nullable=False, default=0)
    image = Column(String, nullable=True)
    # List of {"type", "title", "url", "duration"} dicts
    materials = Column(JSON, default=list)
    max_enrollments = Column(Integer, nullable=True)
    created_at = Column(String, nullable=False)

    enrollments = relationship(
        "EnrollmentModel",
        back_populates="course",
        cascade="all, delete-orphan",
    )
