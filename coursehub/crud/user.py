from typing import List, Optional
from sqlalchemy.orm import Session

from coursehub.core.constants import EnrollmentStatusEnum, RoleEnum
from coursehub.crud.base import CRUDBase
from coursehub.models.enrollment import Enrollment
from coursehub.models.user import User
from coursehub.schemas.user import UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    def get_by_email(self, db: Session, *, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    def get_first_admin(self, db: Session) -> Optional[User]:
        return db.query(User).filter(User.role == RoleEnum.ADMIN).order_by(User.id).first()

    def get_classmates(self, db: Session, *, user_id: int, course_ids: List[int]) -> List[User]:
        """Other users holding an active enrollment in any of ``course_ids``."""
        if not course_ids:
            return []
        return (
            db.query(User)
            .join(Enrollment, Enrollment.user_id == User.id)
            .filter(
                User.id != user_id,
                Enrollment.course_id.in_(course_ids),
                Enrollment.status == EnrollmentStatusEnum.ACTIVE,
            )
            .distinct()
            .order_by(User.full_name)
            .all()
        )


user = CRUDUser(User)
