from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime
from coursehub.core.constants import TaskStatusEnum, CourseTestStatusEnum


class TaskCreate(BaseModel):
    course_id: int
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatusEnum = TaskStatusEnum.PENDING

class TaskUpdate(BaseModel):
    status: TaskStatusEnum

class Task(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    status: TaskStatusEnum

class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    task_id: int
    user_id: int
    url: str
    created_at: Optional[datetime] = None


class CourseTestCreate(BaseModel):
    course_id: int
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: CourseTestStatusEnum = CourseTestStatusEnum.PENDING
    score: Optional[float] = None

class CourseTestUpdate(BaseModel):
    status: CourseTestStatusEnum
    score: Optional[float] = None

class CourseTest(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    status: CourseTestStatusEnum
    score: Optional[float] = None


class GradeCreate(BaseModel):
    user_id: int
    course_id: int
    value: float = Field(..., ge=0)

class Grade(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    course_id: int
    value: float
    created_at: Optional[datetime] = None
