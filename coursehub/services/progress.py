import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub.core.exceptions import InternalError, NotFoundError
from coursehub.crud.content import lesson as crud_lesson
from coursehub.crud.course import course as crud_course
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.crud.module import module as crud_module
from coursehub.crud.progress import progress as crud_progress
from coursehub.crud.user import user as crud_user
from coursehub.models.progress import ProgressRecord
from coursehub.schemas.progress import CourseCompletion, ProgressUpdate, StudentProgress
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment_guard import enrollment_guard
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


def completion_percentage(watched: int, total: int) -> int:
    if total <= 0:
        return 0
    return round(watched / total * 100)


class ProgressService:

    def _validate_lesson_path(self, db: Session, course_id: int, module_id: int, lesson_id: int) -> None:
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")
        module = crud_module.get(db, id=module_id)
        if not module or module.course_id != course_id:
            raise NotFoundError("Module not found in this course.")
        lesson = crud_lesson.get(db, id=lesson_id)
        if not lesson or lesson.module_id != module_id:
            raise NotFoundError("Lesson not found in this module.")

    def _require_user(self, db: Session, user_id: int) -> None:
        if not crud_user.get(db, id=user_id):
            raise NotFoundError("User not found.")

    def get_progress(self, db: Session, user_id: int) -> List[ProgressRecord]:
        return crud_progress.get_by_user(db, user_id=user_id)

    def set_watched(
        self, db: Session, user_id: int, course_id: int, module_id: int, lesson_id: int, watched: bool
    ) -> ProgressRecord:
        self._validate_lesson_path(db, course_id, module_id, lesson_id)
        try:
            crud_progress.upsert(
                db,
                user_id=user_id,
                course_id=course_id,
                module_id=module_id,
                lesson_id=lesson_id,
                watched=watched,
            )
        except SQLAlchemyError as e:
            logger.error(f"Progress upsert failed for user {user_id}, lesson {lesson_id}: {e}")
            raise InternalError("Could not save progress.")

        return crud_progress.get_by_key(
            db, user_id=user_id, course_id=course_id, module_id=module_id, lesson_id=lesson_id
        )

    def course_completion(self, db: Session, user_id: int, course_id: int) -> CourseCompletion:
        total = crud_progress.count_lessons(db, course_id=course_id)
        watched = crud_progress.count_watched(db, user_id=user_id, course_id=course_id)
        return CourseCompletion(
            user_id=user_id,
            course_id=course_id,
            total_lessons=total,
            watched_lessons=watched,
            percentage=completion_percentage(watched, total),
            eligible=total > 0 and watched == total,
        )

    def course_report(self, db: Session, course_id: int) -> List[StudentProgress]:
        """Completion of every actively enrolled student of a course."""
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")

        total = crud_progress.count_lessons(db, course_id=course_id)
        report = []
        for enrollment in crud_enrollment.get_by_course(db, course_id=course_id, active_only=True):
            watched = crud_progress.count_watched(db, user_id=enrollment.user_id, course_id=course_id)
            report.append(
                StudentProgress(
                    user_id=enrollment.user_id,
                    full_name=enrollment.user.full_name,
                    percentage=completion_percentage(watched, total),
                )
            )
        return report

    # Authorization at the HTTP boundary

    def read_progress(self, db: Session, user_id: int, context: UserContext) -> List[ProgressRecord]:
        PermissionHelper.require_self_or_admin(context, user_id)
        return self.get_progress(db, user_id)

    def update_progress(
        self, db: Session, user_id: int, progress_in: ProgressUpdate, context: UserContext
    ) -> ProgressRecord:
        PermissionHelper.require_self_or_admin(context, user_id)
        self._require_user(db, user_id)
        if not PermissionHelper.is_admin(context):
            if not crud_course.get(db, id=progress_in.course_id):
                raise NotFoundError("Course not found.")
            enrollment_guard.require_active_enrollment(db, user_id, progress_in.course_id)

        record = self.set_watched(
            db,
            user_id,
            progress_in.course_id,
            progress_in.module_id,
            progress_in.lesson_id,
            progress_in.watched,
        )
        logger.info(
            f"User {context.id} set lesson {progress_in.lesson_id} watched={progress_in.watched} for user {user_id}"
        )
        return record

    def read_completion(self, db: Session, user_id: int, course_id: int, context: UserContext) -> CourseCompletion:
        PermissionHelper.require_self_or_admin(context, user_id)
        self._require_user(db, user_id)
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")
        return self.course_completion(db, user_id, course_id)


progress_service = ProgressService()
