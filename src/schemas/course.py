"""Course schema definitions."""

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

Difficulty = Literal["beginner", "intermediate", "advanced"]


class Material(BaseModel):
    type: Literal["video", "document", "link"]
    title: str
    url: Optional[str] = None
    duration: Optional[str] = None


class CourseCreate(BaseModel):
    title: str = Field(min_length=1)
    description: str = Field(min_length=1)
    category: Optional[str] = None
    difficulty: Difficulty = "beginner"
    duration: Optional[str] = None
    price: float = Field(default=0, ge=0)
    image: Optional[str] = None
    materials: List[Material] = Field(default_factory=list)
    max_enrollments: Optional[int] = Field(
        default=None,
        gt=0,
        description="Enrollment cap; null means unlimited.",
    )


class CourseUpdate(BaseModel):
    """Partial course update. Owner and enrollments cannot be changed here."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    duration: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    image: Optional[str] = None
    materials: Optional[List[Material]] = None
    max_enrollments: Optional[int] = Field(default=None, gt=0)


class Course(BaseModel):
    course_id: str
    title: str
    description: str
    instructor_id: str
    instructor_name: Optional[str] = None
    category: Optional[str] = None
    difficulty: Difficulty = "beginner"
    duration: Optional[str] = None
    price: float = 0
    image: Optional[str] = None
    materials: List[Material] = Field(default_factory=list)
    max_enrollments: Optional[int] = None
    enrolled_students: List[str] = Field(
        default_factory=list,
        description="IDs of enrolled students, read from the enrollment table.",
    )
    created_at: str


class EnrollResponse(BaseModel):
    message: str
    course_id: str
    enrolled_at: str
