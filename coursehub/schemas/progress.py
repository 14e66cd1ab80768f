from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime


class ProgressUpdate(BaseModel):
    course_id: int
    module_id: int
    lesson_id: int
    watched: bool


class ProgressRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    module_id: int
    lesson_id: int
    watched: bool
    updated_at: Optional[datetime] = None


class CourseCompletion(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    user_id: int
    course_id: int
    total_lessons: int
    watched_lessons: int
    percentage: int
    eligible: bool


class StudentProgress(BaseModel):
    user_id: int
    full_name: str
    percentage: int


class Certificate(BaseModel):
    course_id: int
    user_id: int
    certificate: str
