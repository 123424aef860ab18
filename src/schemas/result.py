"""Submission and result schema definitions."""

from typing import List, Optional, Union

from pydantic import BaseModel, Field, StrictBool, StrictInt, StrictStr

# Raw answer value as sent by the client. Interpretation depends on the
# question type it is graded against.
AnswerValue = Union[StrictBool, StrictInt, StrictStr]


class AnswerSubmission(BaseModel):
    answer: Optional[AnswerValue] = Field(
        default=None,
        description="Option text or index, true/false, or free text. Null means unanswered.",
    )


class SubmitAssessmentRequest(BaseModel):
    answers: List[AnswerSubmission] = Field(
        description="One entry per question, in question order."
    )
    time_spent: Optional[float] = Field(
        default=None, ge=0, description="Minutes spent on the attempt."
    )


class GradedAnswer(BaseModel):
    question_index: int
    answer: AnswerValue
    is_correct: bool
    points: int


class Result(BaseModel):
    result_id: str
    student_id: str
    assessment_id: str
    course_id: str
    answers: List[GradedAnswer]
    score: int
    total_points: int
    percentage: int
    time_spent: Optional[float] = None
    submitted_at: str
    assessment_title: Optional[str] = None
    course_title: Optional[str] = None
