import logging
from typing import List

from sqlalchemy import or_
from sqlalchemy.orm import Session

from coursehub.core.constants import ContentKindEnum
from coursehub.core.exceptions import NotFoundError
from coursehub.crud.assessment import quiz_response as crud_quiz_response
from coursehub.crud.content import lesson as crud_lesson, live_session as crud_live_session, quiz as crud_quiz, upload as crud_upload, video as crud_video
from coursehub.crud.course import course as crud_course
from coursehub.crud.forum import forum as crud_forum
from coursehub.crud.module import module as crud_module
from coursehub.crud.progress import progress as crud_progress
from coursehub.models.content import Lesson, LiveSession, Quiz, Upload, Video
from coursehub.models.forum import Forum
from coursehub.models.module import Module
from coursehub.models.progress import ProgressRecord
from coursehub.models.quiz_response import QuizResponse
from coursehub.schemas.module import ModuleCreate, ModuleUpdate
from coursehub.schemas.reorder import ReorderRequest
from coursehub.schemas.user import UserContext
from coursehub.services.ordinal import ordinal_service
from coursehub.services.storage import storage_service
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class ModuleService:
    def get_module_or_404(self, db: Session, module_id: int) -> Module:
        module = crud_module.get(db, id=module_id)
        if not module:
            raise NotFoundError("Module not found.")
        return module

    def get_course_module_or_404(self, db: Session, course_id: int, module_id: int) -> Module:
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")
        module = crud_module.get(db, id=module_id)
        if not module or module.course_id != course_id:
            raise NotFoundError("Module not found in this course.")
        return module

    def create_module(self, db: Session, module_in: ModuleCreate, context: UserContext) -> Module:
        PermissionHelper.require_admin(context)
        if not crud_course.get(db, id=module_in.course_id):
            raise NotFoundError("Course not found.")

        order = ordinal_service.place(db, ContentKindEnum.MODULES, module_in.course_id, module_in.order)
        module = crud_module.create(db, obj_in={**module_in.model_dump(), "order": order})
        logger.info(f"Module {module.id} created in course {module.course_id} at position {order}")
        return module

    def update_module(self, db: Session, module_id: int, module_in: ModuleUpdate, context: UserContext) -> Module:
        PermissionHelper.require_admin(context)
        module = self.get_module_or_404(db, module_id)
        return crud_module.update(db, db_obj=module, obj_in=module_in)

    def purge(self, db: Session, module: Module) -> List[str]:
        """Deletes a module and everything under it, children first.

        Returns the stored object paths that belonged to the removed rows; the
        caller schedules their removal once the transaction commits.
        """
        lesson_ids = [row.id for row in db.query(Lesson.id).filter(Lesson.module_id == module.id)]
        quiz_ids = [row.id for row in db.query(Quiz.id).filter(Quiz.module_id == module.id)]
        forum_ids = [row.id for row in db.query(Forum.id).filter(Forum.module_id == module.id)]
        urls = [row.url for row in db.query(Video.url).filter(Video.module_id == module.id)]
        urls += [row.url for row in db.query(Upload.url).filter(Upload.module_id == module.id)]

        progress_criteria = [ProgressRecord.module_id == module.id]
        if lesson_ids:
            progress_criteria.append(ProgressRecord.lesson_id.in_(lesson_ids))
        crud_progress.delete_where(db, or_(*progress_criteria))
        crud_lesson.delete_where(db, Lesson.module_id == module.id)
        crud_video.delete_where(db, Video.module_id == module.id)
        crud_live_session.delete_where(db, LiveSession.module_id == module.id)
        if quiz_ids:
            crud_quiz_response.delete_where(db, QuizResponse.quiz_id.in_(quiz_ids))
        crud_quiz.delete_where(db, Quiz.module_id == module.id)
        crud_upload.delete_where(db, Upload.module_id == module.id)
        crud_forum.delete_where(db, Forum.module_id == module.id)
        crud_module.delete_where(db, Module.id == module.id)

        logger.info(
            f"Module {module.id} removed with {len(lesson_ids)} lessons, {len(quiz_ids)} quizzes, "
            f"{len(forum_ids)} forums and {len(urls)} stored files"
        )
        return urls

    def delete_module(self, db: Session, module_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        module = self.get_module_or_404(db, module_id)
        course_id = module.course_id

        urls = self.purge(db, module)
        db.expire_all()
        ordinal_service.close_gap(db, ContentKindEnum.MODULES, course_id)
        storage_service.delete_after_commit(db, urls)

    def reorder_modules(self, db: Session, course_id: int, reorder_in: ReorderRequest, context: UserContext) -> List[Module]:
        PermissionHelper.require_admin(context)
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")
        return ordinal_service.reorder(db, ContentKindEnum.MODULES, course_id, reorder_in.ordered_ids)

    def reorder_content(
        self, db: Session, course_id: int, module_id: int, kind: ContentKindEnum,
        reorder_in: ReorderRequest, context: UserContext
    ) -> List:
        PermissionHelper.require_admin(context)
        self.get_course_module_or_404(db, course_id, module_id)
        return ordinal_service.reorder(db, kind, module_id, reorder_in.ordered_ids)


module_service = ModuleService()
