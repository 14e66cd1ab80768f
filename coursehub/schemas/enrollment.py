from pydantic import BaseModel, ConfigDict
from typing import Optional
from datetime import datetime
from coursehub.core.constants import EnrollmentStatusEnum


class EnrollmentCreate(BaseModel):
    user_id: int
    course_id: int
    status: EnrollmentStatusEnum = EnrollmentStatusEnum.ACTIVE


class EnrollmentUpdate(BaseModel):
    status: EnrollmentStatusEnum


class Enrollment(BaseModel):
    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

    id: int
    user_id: int
    course_id: int
    status: EnrollmentStatusEnum
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CourseStudent(BaseModel):
    """Row of the admin course roster."""
    enrollment_id: int
    user_id: int
    full_name: str
    email: str
    status: EnrollmentStatusEnum

    model_config = ConfigDict(use_enum_values=True)
