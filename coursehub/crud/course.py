from typing import List, Optional
from sqlalchemy.orm import Session, selectinload

from coursehub.crud.base import CRUDBase
from coursehub.models.course import Course
from coursehub.models.module import Module
from coursehub.schemas.course import CourseCreate, CourseUpdate


class CRUDCourse(CRUDBase[Course, CourseCreate, CourseUpdate]):

    def get_with_lessons(self, db: Session, id: int) -> Optional[Course]:
        return (
            db.query(Course)
            .options(selectinload(Course.modules).selectinload(Module.lessons))
            .filter(Course.id == id)
            .first()
        )

    def get_with_content(self, db: Session, id: int) -> Optional[Course]:
        return (
            db.query(Course)
            .options(
                selectinload(Course.modules).selectinload(Module.videos),
                selectinload(Course.modules).selectinload(Module.live_sessions),
                selectinload(Course.modules).selectinload(Module.quizzes),
                selectinload(Course.modules).selectinload(Module.forums),
                selectinload(Course.modules).selectinload(Module.uploads),
            )
            .filter(Course.id == id)
            .first()
        )

    def get_multi_with_lessons(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[Course]:
        return (
            db.query(Course)
            .options(selectinload(Course.modules).selectinload(Module.lessons))
            .order_by(Course.id)
            .offset(skip)
            .limit(limit)
            .all()
        )


course = CRUDCourse(Course)
