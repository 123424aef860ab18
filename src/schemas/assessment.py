"""Assessment and question schema definitions.

Questions are a tagged union on ``type``. Each variant types its own correct
answer, so grading never has to guess how to compare values.
"""

from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from config import DEFAULT_ASSESSMENT_ATTEMPTS, DEFAULT_QUESTION_POINTS


class _QuestionBase(BaseModel):
    question: str = Field(min_length=1, description="The question text.")
    points: int = Field(
        default=DEFAULT_QUESTION_POINTS,
        ge=0,
        description="Points awarded for a correct answer.",
    )


class MultipleChoiceQuestion(_QuestionBase):
    type: Literal["multiple-choice"] = "multiple-choice"
    options: List[str] = Field(min_length=2)
    correct_answer: str = Field(description="Text of the correct option.")

    @model_validator(mode="after")
    def check_correct_answer_is_option(self):
        if self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the options")
        return self


class TrueFalseQuestion(_QuestionBase):
    type: Literal["true-false"] = "true-false"
    correct_answer: bool


class ShortAnswerQuestion(_QuestionBase):
    type: Literal["short-answer"] = "short-answer"
    correct_answer: str = Field(min_length=1)


Question = Annotated[
    Union[MultipleChoiceQuestion, TrueFalseQuestion, ShortAnswerQuestion],
    Field(discriminator="type"),
]

QuestionList = TypeAdapter(List[Question])


def _default_question_type(value: Any) -> Any:
    # Questions without a type are multiple-choice
    if isinstance(value, list):
        return [
            {**item, "type": item.get("type") or "multiple-choice"}
            if isinstance(item, dict)
            else item
            for item in value
        ]
    return value


class AssessmentCreate(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    course_id: str
    questions: List[Question] = Field(min_length=1)
    time_limit: Optional[int] = Field(default=None, gt=0, description="Minutes.")
    attempts: int = Field(default=DEFAULT_ASSESSMENT_ATTEMPTS, ge=1)
    is_active: bool = True

    @field_validator("questions", mode="before")
    @classmethod
    def default_question_type(cls, value: Any) -> Any:
        return _default_question_type(value)


class AssessmentUpdate(BaseModel):
    """Partial assessment update.

    Replacing the questions does not change ``total_points``.
    """

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    questions: Optional[List[Question]] = Field(default=None, min_length=1)
    time_limit: Optional[int] = Field(default=None, gt=0)
    attempts: Optional[int] = Field(default=None, ge=1)
    is_active: Optional[bool] = None

    @field_validator("questions", mode="before")
    @classmethod
    def default_question_type(cls, value: Any) -> Any:
        return _default_question_type(value)


class Assessment(BaseModel):
    assessment_id: str
    title: str
    description: Optional[str] = None
    course_id: str
    course_title: Optional[str] = None
    instructor_id: str
    questions: List[Question]
    total_points: int
    time_limit: Optional[int] = None
    attempts: int = DEFAULT_ASSESSMENT_ATTEMPTS
    is_active: bool = True
    created_at: str


class QuestionPrompt(BaseModel):
    """A question as shown to a student, without its correct answer."""

    question: str
    type: Literal["multiple-choice", "true-false", "short-answer"]
    options: List[str] = Field(default_factory=list)
    points: int


class StudentAssessment(BaseModel):
    assessment_id: str
    title: str
    description: Optional[str] = None
    course_id: str
    course_title: Optional[str] = None
    questions: List[QuestionPrompt]
    total_points: int
    time_limit: Optional[int] = None
    attempts: int
    is_active: bool
    created_at: str
