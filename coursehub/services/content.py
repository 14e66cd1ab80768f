import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from coursehub.core.constants import ContentKindEnum
from coursehub.core.exceptions import NotFoundError, ValidationError
from coursehub.crud.assessment import quiz_response as crud_quiz_response
from coursehub.crud.content import lesson as crud_lesson, live_session as crud_live_session, quiz as crud_quiz, upload as crud_upload, video as crud_video
from coursehub.crud.progress import progress as crud_progress
from coursehub.models.content import Lesson, LiveSession, Quiz, Upload, Video
from coursehub.models.progress import ProgressRecord
from coursehub.models.quiz_response import QuizResponse
from coursehub.schemas.content import LessonCreate, LessonUpdate, LiveSessionCreate, QuizAnswer, QuizCreate, QuizResult, UploadCreate, VideoCreate
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment_guard import enrollment_guard
from coursehub.services.module import module_service
from coursehub.services.ordinal import ordinal_service
from coursehub.services.storage import IncomingFile, storage_service
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class ContentService:
    """Ordered module content: lessons, videos, live sessions, quizzes and upload assignments."""

    def _create_ordered(self, db: Session, crud, kind: ContentKindEnum, module_id: int, data: dict, order: Optional[int]):
        module_service.get_module_or_404(db, module_id)
        position = ordinal_service.place(db, kind, module_id, order)
        item = crud.create(db, obj_in={**data, "module_id": module_id, "order": position})
        logger.info(f"Created {kind.value} {item.id} in module {module_id} at position {position}")
        return item

    def _delete_ordered(self, db: Session, kind: ContentKindEnum, item) -> None:
        module_id = item.module_id
        db.delete(item)
        db.flush()
        ordinal_service.close_gap(db, kind, module_id)

    def _get_or_404(self, db: Session, crud, item_id: int, label: str):
        item = crud.get(db, id=item_id)
        if not item:
            raise NotFoundError(f"{label} not found.")
        return item

    # Lessons

    def create_lesson(self, db: Session, lesson_in: LessonCreate, context: UserContext) -> Lesson:
        PermissionHelper.require_admin(context)
        return self._create_ordered(
            db, crud_lesson, ContentKindEnum.LESSONS, lesson_in.module_id,
            {"title": lesson_in.title}, lesson_in.order,
        )

    def update_lesson(self, db: Session, lesson_id: int, lesson_in: LessonUpdate, context: UserContext) -> Lesson:
        PermissionHelper.require_admin(context)
        lesson = self._get_or_404(db, crud_lesson, lesson_id, "Lesson")
        return crud_lesson.update(db, db_obj=lesson, obj_in=lesson_in)

    def delete_lesson(self, db: Session, lesson_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        lesson = self._get_or_404(db, crud_lesson, lesson_id, "Lesson")
        crud_progress.delete_where(db, ProgressRecord.lesson_id == lesson.id)
        self._delete_ordered(db, ContentKindEnum.LESSONS, lesson)

    # Videos

    def create_video(self, db: Session, video_in: VideoCreate, file: Optional[IncomingFile], context: UserContext) -> Video:
        PermissionHelper.require_admin(context)
        module_service.get_module_or_404(db, video_in.module_id)
        if file is None:
            raise ValidationError("A video file is required.")

        url = storage_service.save(file)
        try:
            return self._create_ordered(
                db, crud_video, ContentKindEnum.VIDEOS, video_in.module_id,
                {"title": video_in.title, "url": url}, video_in.order,
            )
        except Exception:
            storage_service.delete(url)
            raise

    def delete_video(self, db: Session, video_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        video = self._get_or_404(db, crud_video, video_id, "Video")
        url = video.url
        self._delete_ordered(db, ContentKindEnum.VIDEOS, video)
        storage_service.delete_after_commit(db, [url])

    # Live sessions

    def create_live_session(self, db: Session, session_in: LiveSessionCreate, context: UserContext) -> LiveSession:
        PermissionHelper.require_admin(context)
        data = session_in.model_dump(exclude={"module_id", "order"})
        return self._create_ordered(
            db, crud_live_session, ContentKindEnum.LIVE_SESSIONS, session_in.module_id, data, session_in.order
        )

    def delete_live_session(self, db: Session, session_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        live_session = self._get_or_404(db, crud_live_session, session_id, "Live session")
        self._delete_ordered(db, ContentKindEnum.LIVE_SESSIONS, live_session)

    # Quizzes

    def create_quiz(self, db: Session, quiz_in: QuizCreate, context: UserContext) -> Quiz:
        PermissionHelper.require_admin(context)
        data = quiz_in.model_dump(exclude={"module_id", "order"})
        return self._create_ordered(db, crud_quiz, ContentKindEnum.QUIZZES, quiz_in.module_id, data, quiz_in.order)

    def delete_quiz(self, db: Session, quiz_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        quiz = self._get_or_404(db, crud_quiz, quiz_id, "Quiz")
        crud_quiz_response.delete_where(db, QuizResponse.quiz_id == quiz.id)
        self._delete_ordered(db, ContentKindEnum.QUIZZES, quiz)

    def submit_quiz_response(self, db: Session, quiz_id: int, answer_in: QuizAnswer, context: UserContext) -> QuizResult:
        quiz = self._get_or_404(db, crud_quiz, quiz_id, "Quiz")
        course_id = quiz.module.course_id
        # No admin bypass: submitting always requires the caller's own enrollment
        enrollment_guard.require_active_enrollment(db, context.id, course_id)

        is_correct = answer_in.answer == quiz.correct_answer
        score = float(quiz.min_score) if is_correct else 0.0
        crud_quiz_response.create(
            db,
            obj_in={
                "quiz_id": quiz.id,
                "user_id": context.id,
                "answer": answer_in.answer,
                "is_correct": is_correct,
                "score": score,
            },
        )
        logger.info(f"User {context.id} answered quiz {quiz.id}: correct={is_correct}")
        return QuizResult(is_correct=is_correct, score=score)

    # Upload assignments

    def create_upload(self, db: Session, upload_in: UploadCreate, file: Optional[IncomingFile], context: UserContext) -> Upload:
        PermissionHelper.require_admin(context)
        module_service.get_module_or_404(db, upload_in.module_id)
        if file is None:
            raise ValidationError("A file is required.")

        url = storage_service.save(file)
        try:
            return self._create_ordered(
                db, crud_upload, ContentKindEnum.UPLOADS, upload_in.module_id,
                {"title": upload_in.title, "instructions": upload_in.instructions, "url": url}, upload_in.order,
            )
        except Exception:
            storage_service.delete(url)
            raise

    def list_uploads(self, db: Session, module_id: int, context: UserContext) -> List[Upload]:
        module = module_service.get_module_or_404(db, module_id)
        enrollment_guard.require_course_access(db, context, module.course_id)
        return crud_upload.get_by_module(db, module_id=module_id)

    def delete_upload(self, db: Session, upload_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        upload = self._get_or_404(db, crud_upload, upload_id, "Upload")
        url = upload.url
        self._delete_ordered(db, ContentKindEnum.UPLOADS, upload)
        storage_service.delete_after_commit(db, [url])


content_service = ContentService()
