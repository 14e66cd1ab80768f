from typing import List, Optional
from sqlalchemy import func
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from coursehub.crud.base import CRUDBase
from coursehub.models.content import Lesson
from coursehub.models.module import Module
from coursehub.models.progress import ProgressRecord
from coursehub.schemas.progress import ProgressUpdate

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

UPSERT_KEY = ["user_id", "course_id", "module_id", "lesson_id"]


class CRUDProgress(CRUDBase[ProgressRecord, ProgressUpdate, ProgressUpdate]):

    def get_by_user(self, db: Session, *, user_id: int) -> List[ProgressRecord]:
        return (
            db.query(ProgressRecord)
            .filter(ProgressRecord.user_id == user_id)
            .order_by(ProgressRecord.course_id, ProgressRecord.module_id, ProgressRecord.lesson_id)
            .all()
        )

    def get_by_key(
        self, db: Session, *, user_id: int, course_id: int, module_id: int, lesson_id: int
    ) -> Optional[ProgressRecord]:
        return (
            db.query(ProgressRecord)
            .filter(
                ProgressRecord.user_id == user_id,
                ProgressRecord.course_id == course_id,
                ProgressRecord.module_id == module_id,
                ProgressRecord.lesson_id == lesson_id,
            )
            .populate_existing()
            .first()
        )

    def upsert(
        self, db: Session, *, user_id: int, course_id: int, module_id: int, lesson_id: int, watched: bool
    ) -> None:
        """One atomic statement; concurrent writers to the same key cannot create two rows."""
        insert = _UPSERT_DIALECTS[db.get_bind().dialect.name]
        stmt = insert(ProgressRecord).values(
            user_id=user_id,
            course_id=course_id,
            module_id=module_id,
            lesson_id=lesson_id,
            watched=watched,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=UPSERT_KEY,
            set_={"watched": stmt.excluded.watched, "updated_at": func.now()},
        )
        db.execute(stmt)

    def count_lessons(self, db: Session, *, course_id: int) -> int:
        return (
            db.query(func.count(Lesson.id))
            .join(Module, Module.id == Lesson.module_id)
            .filter(Module.course_id == course_id)
            .scalar()
        ) or 0

    def count_watched(self, db: Session, *, user_id: int, course_id: int) -> int:
        """Watched lessons that still belong to the course."""
        return (
            db.query(func.count(func.distinct(ProgressRecord.lesson_id)))
            .join(Lesson, Lesson.id == ProgressRecord.lesson_id)
            .join(Module, Module.id == Lesson.module_id)
            .filter(
                ProgressRecord.user_id == user_id,
                ProgressRecord.course_id == course_id,
                ProgressRecord.watched.is_(True),
                Module.course_id == course_id,
            )
            .scalar()
        ) or 0


progress = CRUDProgress(ProgressRecord)
