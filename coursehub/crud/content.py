from typing import List
from sqlalchemy.orm import Session

from coursehub.crud.base import CRUDBase
from coursehub.models.content import Lesson, LiveSession, Quiz, Upload, Video
from coursehub.schemas.content import LessonCreate, LessonUpdate, LiveSessionCreate, QuizCreate


class CRUDModuleContent(CRUDBase):
    """Shared queries for rows ordered inside a module."""

    def get_by_module(self, db: Session, *, module_id: int) -> List:
        return (
            db.query(self.model)
            .filter(self.model.module_id == module_id)
            .order_by(self.model.order, self.model.id)
            .all()
        )

    def get_by_modules(self, db: Session, *, module_ids: List[int]) -> List:
        if not module_ids:
            return []
        return db.query(self.model).filter(self.model.module_id.in_(module_ids)).all()


class CRUDLesson(CRUDModuleContent, CRUDBase[Lesson, LessonCreate, LessonUpdate]):
    pass


class CRUDLiveSession(CRUDModuleContent, CRUDBase[LiveSession, LiveSessionCreate, LiveSessionCreate]):
    pass


class CRUDQuiz(CRUDModuleContent, CRUDBase[Quiz, QuizCreate, QuizCreate]):
    pass


lesson = CRUDLesson(Lesson)
video = CRUDModuleContent(Video)
live_session = CRUDLiveSession(LiveSession)
quiz = CRUDQuiz(Quiz)
upload = CRUDModuleContent(Upload)
