"""Assessment database model."""

from sqlalchemy import Boolean, Column, Integer, JSON, String, Text

from .base import Base


class AssessmentModel(Base):
    __tablename__ = "assessments"

    assessment_id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    # No foreign key: assessments outlive a deleted course
    course_id = Column(String, index=True, nullable=False)
    instructor_id = Column(String, index=True, nullable=False)
    questions = Column(JSON, default=list)
    # Computed once at creation time
    total_points = Column(Integer, nullable=False, default=0)
    time_limit = Column(Integer, nullable=True)  # minutes
    attempts = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(String, nullable=False)
