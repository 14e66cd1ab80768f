from pydantic import BaseModel, ConfigDict
from typing import List


class ReorderItem(BaseModel):
    id: int


class ReorderRequest(BaseModel):
    """The complete sibling list of a scope, in its new order."""
    items: List[ReorderItem]

    @property
    def ordered_ids(self) -> List[int]:
        return [item.id for item in self.items]


class ReorderedItem(BaseModel):
    id: int
    order: int

    model_config = ConfigDict(from_attributes=True)
