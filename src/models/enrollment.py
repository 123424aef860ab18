"""Enrollment database model.

One row per (student, course) pair. Both "courses of a student" and
"roster of a course" are read from this table.
"""

from sqlalchemy import Column, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import Base


class EnrollmentModel(Base):
    __tablename__ = "enrollments"
    __table_args__ = (
        UniqueConstraint(
            "student_id",
            "course_id",
            name="uq_enrollments_student_course",
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(
        String,
        ForeignKey("users.user_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    course_id = Column(
        String,
        ForeignKey("courses.course_id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    enrolled_at = Column(String, nullable=False)

    student = relationship("UserModel", back_populates="enrollments")
    course = relationship("CourseModel", back_populates="enrollments")
