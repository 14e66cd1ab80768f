from typing import List
from sqlalchemy.orm import Session

from coursehub.core.exceptions import AuthorizationError
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.schemas.user import UserContext
from coursehub.utils.permission import PermissionHelper


class EnrollmentGuard:
    """Content access derives from enrollment state at the moment of the request."""

    def can_access(self, db: Session, user_id: int, course_id: int) -> bool:
        return crud_enrollment.has_active(db, user_id=user_id, course_id=course_id)

    def require_active_enrollment(self, db: Session, user_id: int, course_id: int) -> None:
        if not self.can_access(db, user_id, course_id):
            raise AuthorizationError(
                "An active enrollment in this course is required.",
                details={"course_id": course_id},
            )

    def require_course_access(self, db: Session, context: UserContext, course_id: int) -> None:
        if PermissionHelper.is_admin(context):
            return
        self.require_active_enrollment(db, context.id, course_id)

    def active_course_ids(self, db: Session, user_id: int) -> List[int]:
        return crud_enrollment.get_active_course_ids(db, user_id=user_id)


enrollment_guard = EnrollmentGuard()
