from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List
from datetime import datetime
from coursehub.core.constants import COURSE_DURATION_PATTERN, CourseStatusEnum
from coursehub.schemas.module import ModuleContent, ModuleWithLessons

class CourseBase(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    modality: Optional[str] = None
    duration: str = Field(..., pattern=COURSE_DURATION_PATTERN, description="Whole hours, e.g. 40h")
    price: float = Field(..., ge=0)
    status: CourseStatusEnum = Field(default=CourseStatusEnum.DRAFT)

    model_config = ConfigDict(use_enum_values=True)

class CourseCreate(CourseBase):
    pass

class CourseUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    modality: Optional[str] = None
    duration: Optional[str] = Field(None, pattern=COURSE_DURATION_PATTERN)
    price: Optional[float] = Field(None, ge=0)
    status: Optional[CourseStatusEnum] = None

    model_config = ConfigDict(use_enum_values=True)

class Course(CourseBase):
    id: int
    duration: str
    image: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class CourseDetail(Course):
    modules: List[ModuleWithLessons] = Field(default_factory=list)

class CourseContent(BaseModel):
    id: int
    title: str
    modules: List[ModuleContent] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
