from pydantic import BaseModel, ConfigDict, Field
from typing import Optional

class ForumCreate(BaseModel):
    module_id: int
    title: str = Field(..., min_length=1)
    order: Optional[int] = None

class Forum(BaseModel):
    id: int
    module_id: int
    course_id: int
    title: str
    order: int

    model_config = ConfigDict(from_attributes=True)
