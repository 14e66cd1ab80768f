from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Optional, List
from datetime import datetime


class LessonCreate(BaseModel):
    module_id: int
    title: str = Field(..., min_length=1)
    order: Optional[int] = None

class LessonUpdate(BaseModel):
    title: str = Field(..., min_length=1)

class Lesson(BaseModel):
    id: int
    module_id: int
    title: str
    order: int

    model_config = ConfigDict(from_attributes=True)


class VideoCreate(BaseModel):
    module_id: int
    title: str = Field(..., min_length=1)
    order: Optional[int] = None

class Video(BaseModel):
    id: int
    module_id: int
    title: str
    url: str
    order: int

    model_config = ConfigDict(from_attributes=True)


class LiveSessionCreate(BaseModel):
    module_id: int
    title: str = Field(..., min_length=1)
    meeting_link: str = Field(..., min_length=1)
    scheduled_at: datetime
    password: Optional[str] = None
    order: Optional[int] = None

class LiveSession(BaseModel):
    id: int
    module_id: int
    title: str
    meeting_link: str
    scheduled_at: datetime
    password: Optional[str] = None
    order: int

    model_config = ConfigDict(from_attributes=True)


class QuizCreate(BaseModel):
    module_id: int
    question: str = Field(..., min_length=1)
    options: List[str]
    correct_answer: str
    min_score: float = Field(..., ge=0)
    order: Optional[int] = None

    @field_validator("options")
    def at_least_two_options(cls, v):
        if len(v) < 2:
            raise ValueError("A quiz needs at least two options.")
        return v

    @model_validator(mode="after")
    def answer_among_options(self):
        if self.correct_answer not in self.options:
            raise ValueError("correct_answer must be one of the options.")
        return self

class Quiz(BaseModel):
    """Student-facing quiz; the correct answer is not exposed."""
    id: int
    module_id: int
    question: str
    options: List[str]
    min_score: float
    order: int

    model_config = ConfigDict(from_attributes=True)

class QuizDetail(Quiz):
    correct_answer: str

class QuizAnswer(BaseModel):
    answer: str = Field(..., min_length=1)

class QuizResult(BaseModel):
    is_correct: bool
    score: float


class UploadCreate(BaseModel):
    module_id: int
    title: str = Field(..., min_length=1)
    instructions: Optional[str] = None
    order: Optional[int] = None

class Upload(BaseModel):
    id: int
    module_id: int
    title: str
    instructions: Optional[str] = None
    url: str
    order: int

    model_config = ConfigDict(from_attributes=True)
