from typing import List
from sqlalchemy.orm import Session

from coursehub.crud.base import CRUDBase
from coursehub.models.module import Module
from coursehub.schemas.module import ModuleCreate, ModuleUpdate


class CRUDModule(CRUDBase[Module, ModuleCreate, ModuleUpdate]):
    def get_by_course(self, db: Session, *, course_id: int) -> List[Module]:
        return (
            db.query(Module)
            .filter(Module.course_id == course_id)
            .order_by(Module.order, Module.id)
            .all()
        )

    def get_ids_by_course(self, db: Session, *, course_id: int) -> List[int]:
        return [row.id for row in db.query(Module.id).filter(Module.course_id == course_id).all()]


module = CRUDModule(Module)
