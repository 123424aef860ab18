"""Analytics schema definitions.

Metrics the platform does not track yet are reported as ``None`` rather
than filled with made-up numbers.
"""

from typing import List, Optional

from pydantic import BaseModel


class AdminAnalytics(BaseModel):
    total_users: int
    total_courses: int
    total_assessments: int
    total_students: int
    total_instructors: int
    total_enrollments: int
    total_results: int


class CoursePerformance(BaseModel):
    course_id: str
    name: str
    enrollments: int


class InstructorAnalytics(BaseModel):
    total_courses: int
    total_enrollments: int
    total_assessments: int
    average_rating: Optional[float] = None
    course_performance: List[CoursePerformance]


class ResultProgress(BaseModel):
    course_id: str
    assessment_id: str
    score: int


class StudentAnalytics(BaseModel):
    enrolled_courses: int
    completed_assessments: int
    average_score: int
    total_study_time: float
    progress: List[ResultProgress]


class StudentScore(BaseModel):
    student_id: str
    score: int


class CourseAnalytics(BaseModel):
    course_id: str
    enrollments: int
    assessments: int
    average_score: int
    completion_rate: Optional[float] = None
    student_progress: List[StudentScore]
