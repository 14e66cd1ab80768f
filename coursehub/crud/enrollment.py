from typing import List, Optional
from sqlalchemy import exists
from sqlalchemy.orm import Session, selectinload

from coursehub.core.constants import EnrollmentStatusEnum
from coursehub.crud.base import CRUDBase
from coursehub.models.course import Course
from coursehub.models.enrollment import Enrollment
from coursehub.schemas.enrollment import EnrollmentCreate, EnrollmentUpdate


class CRUDEnrollment(CRUDBase[Enrollment, EnrollmentCreate, EnrollmentUpdate]):

    def _query_active(self, db: Session):
        return db.query(Enrollment).filter(Enrollment.status == EnrollmentStatusEnum.ACTIVE)

    def has_active(self, db: Session, *, user_id: int, course_id: int, exclude_id: Optional[int] = None) -> bool:
        criteria = [
            Enrollment.user_id == user_id,
            Enrollment.course_id == course_id,
            Enrollment.status == EnrollmentStatusEnum.ACTIVE,
        ]
        if exclude_id is not None:
            criteria.append(Enrollment.id != exclude_id)
        return db.query(exists().where(*criteria)).scalar()

    def get_active_course_ids(self, db: Session, *, user_id: int) -> List[int]:
        rows = (
            self._query_active(db)
            .with_entities(Enrollment.course_id)
            .filter(Enrollment.user_id == user_id)
            .distinct()
            .all()
        )
        return [row.course_id for row in rows]

    def get_by_user(self, db: Session, *, user_id: int) -> List[Enrollment]:
        return (
            db.query(Enrollment)
            .filter(Enrollment.user_id == user_id)
            .order_by(Enrollment.id)
            .all()
        )

    def get_by_course(self, db: Session, *, course_id: int, active_only: bool = False) -> List[Enrollment]:
        query = db.query(Enrollment).options(selectinload(Enrollment.user))
        if active_only:
            query = query.filter(Enrollment.status == EnrollmentStatusEnum.ACTIVE)
        return query.filter(Enrollment.course_id == course_id).order_by(Enrollment.id).all()

    def get_active_course_titles(self, db: Session, *, user_id: int, course_ids: List[int]) -> List[str]:
        if not course_ids:
            return []
        rows = (
            self._query_active(db)
            .join(Course, Course.id == Enrollment.course_id)
            .with_entities(Course.title)
            .filter(Enrollment.user_id == user_id, Enrollment.course_id.in_(course_ids))
            .order_by(Course.title)
            .all()
        )
        return [row.title for row in rows]


enrollment = CRUDEnrollment(Enrollment)
