from pydantic import BaseModel, EmailStr, field_validator, ConfigDict, model_validator
from typing import Optional, Any, List
from datetime import datetime

from coursehub.core.constants import RoleEnum

class UserBase(BaseModel):
    """Base user schema with common fields."""
    full_name: str
    email: EmailStr

class UserCreate(UserBase):
    """Admin-side user creation. Role cannot be changed afterwards."""
    password: str
    role: RoleEnum = RoleEnum.STUDENT

    model_config = ConfigDict(use_enum_values=True)

    @field_validator("password")
    def validate_password(cls, v):
        if not v or not v.strip():
            raise ValueError("Password cannot be empty or contain only whitespace.")
        if len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

class UserUpdate(BaseModel):
    """Self-service profile update."""
    full_name: Optional[str] = None
    current_password: Optional[str] = None
    new_password: Optional[str] = None

    @field_validator("full_name")
    def not_empty(cls, v):
        if v is not None and not v.strip():
            raise ValueError("Full name cannot be empty")
        return v

    @field_validator("new_password")
    def validate_new_password(cls, v):
        if v is not None and len(v) < 8:
            raise ValueError("Password must be at least 8 characters long.")
        return v

    @model_validator(mode='before')
    @classmethod
    def at_least_one_value(cls, data: Any):
        if isinstance(data, dict) and not (data.get("full_name") or data.get("new_password")):
            raise ValueError("Provide at least full_name or new_password")
        return data

class User(UserBase):
    id: int
    role: RoleEnum
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True, use_enum_values=True)

class UserContext(BaseModel):
    """The caller's identity, re-derived from the bearer token on every request."""
    id: int
    email: str
    role: RoleEnum
    name: str

    model_config = ConfigDict(use_enum_values=True)

class Classmate(BaseModel):
    """Someone sharing at least one active course with the caller."""
    id: int
    full_name: str
    email: str
    role: RoleEnum
    courses: List[str] = []

    model_config = ConfigDict(use_enum_values=True)
