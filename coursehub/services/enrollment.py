import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from coursehub.core.constants import EnrollmentStatusEnum
from coursehub.core.exceptions import ConflictError, NotFoundError
from coursehub.crud.course import course as crud_course
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.crud.user import user as crud_user
from coursehub.models.enrollment import Enrollment
from coursehub.schemas.enrollment import CourseStudent, EnrollmentCreate, EnrollmentUpdate
from coursehub.schemas.user import UserContext
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class EnrollmentService:

    def _conflict(self, user_id: int, course_id: int) -> ConflictError:
        return ConflictError(
            "The user already has an active enrollment in this course.",
            details={"user_id": user_id, "course_id": course_id},
        )

    def _flush_or_conflict(self, db: Session, user_id: int, course_id: int) -> None:
        # The partial unique index catches a concurrent activation the check above missed
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            raise self._conflict(user_id, course_id)

    def list_own(self, db: Session, context: UserContext) -> List[Enrollment]:
        return crud_enrollment.get_by_user(db, user_id=context.id)

    def create_enrollment(self, db: Session, enrollment_in: EnrollmentCreate, context: UserContext) -> Enrollment:
        PermissionHelper.require_admin(context)
        if not crud_user.get(db, id=enrollment_in.user_id):
            raise NotFoundError("User not found.")
        if not crud_course.get(db, id=enrollment_in.course_id):
            raise NotFoundError("Course not found.")

        if enrollment_in.status == EnrollmentStatusEnum.ACTIVE and crud_enrollment.has_active(
            db, user_id=enrollment_in.user_id, course_id=enrollment_in.course_id
        ):
            raise self._conflict(enrollment_in.user_id, enrollment_in.course_id)

        enrollment = Enrollment(**enrollment_in.model_dump())
        db.add(enrollment)
        self._flush_or_conflict(db, enrollment_in.user_id, enrollment_in.course_id)
        db.refresh(enrollment)
        logger.info(f"User {enrollment.user_id} enrolled in course {enrollment.course_id} ({enrollment.status.value})")
        return enrollment

    def update_enrollment(
        self, db: Session, enrollment_id: int, enrollment_in: EnrollmentUpdate, context: UserContext
    ) -> Enrollment:
        PermissionHelper.require_admin(context)
        enrollment = crud_enrollment.get(db, id=enrollment_id)
        if not enrollment:
            raise NotFoundError("Enrollment not found.")

        if enrollment_in.status == EnrollmentStatusEnum.ACTIVE and crud_enrollment.has_active(
            db, user_id=enrollment.user_id, course_id=enrollment.course_id, exclude_id=enrollment.id
        ):
            raise self._conflict(enrollment.user_id, enrollment.course_id)

        enrollment.status = enrollment_in.status
        db.add(enrollment)
        self._flush_or_conflict(db, enrollment.user_id, enrollment.course_id)
        db.refresh(enrollment)
        logger.info(f"Enrollment {enrollment.id} set to {enrollment.status.value}")
        return enrollment

    def delete_enrollment(self, db: Session, enrollment_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        if not crud_enrollment.delete(db, id=enrollment_id):
            raise NotFoundError("Enrollment not found.")

    def list_course_students(self, db: Session, course_id: int, context: UserContext) -> List[CourseStudent]:
        PermissionHelper.require_admin(context)
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")
        return [
            CourseStudent(
                enrollment_id=enrollment.id,
                user_id=enrollment.user_id,
                full_name=enrollment.user.full_name,
                email=enrollment.user.email,
                status=enrollment.status,
            )
            for enrollment in crud_enrollment.get_by_course(db, course_id=course_id)
        ]


enrollment_service = EnrollmentService()
