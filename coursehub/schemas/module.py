from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List

from coursehub.schemas.content import Lesson, Video, LiveSession, Quiz, Upload
from coursehub.schemas.forum import Forum

class ModuleCreate(BaseModel):
    course_id: int
    title: str = Field(..., min_length=1)
    order: Optional[int] = None

class ModuleUpdate(BaseModel):
    title: str = Field(..., min_length=1)

class Module(BaseModel):
    id: int
    course_id: int
    title: str
    order: int

    model_config = ConfigDict(from_attributes=True)

class ModuleWithLessons(Module):
    lessons: List[Lesson] = Field(default_factory=list)

class ModuleContent(Module):
    """A module with every ordered content collection."""
    videos: List[Video] = Field(default_factory=list)
    live_sessions: List[LiveSession] = Field(default_factory=list, alias="liveSessions")
    quizzes: List[Quiz] = Field(default_factory=list)
    forums: List[Forum] = Field(default_factory=list)
    uploads: List[Upload] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
