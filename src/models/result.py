"""Assessment result database model.

Results are written once at grading time and never updated.
"""

from sqlalchemy import Column, Float, Integer, JSON, String

from .base import Base


class ResultModel(Base):
    __tablename__ = "results"

    result_id = Column(String, primary_key=True, index=True)
    student_id = Column(String, index=True, nullable=False)
    assessment_id = Column(String, index=True, nullable=False)
    course_id = Column(String, index=True, nullable=False)
    # List of {"question_index", "answer", "is_correct", "points"} dicts
    answers = Column(JSON, default=list)
    score = Column(Integer, nullable=False)
    total_points = Column(Integer, nullable=False)
    percentage = Column(Integer, nullable=False)
    time_spent = Column(Float, nullable=True)  # minutes
    submitted_at = Column(String, nullable=False)
