import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from coursehub.core.exceptions import NotFoundError
from coursehub.crud.assessment import course_test as crud_course_test, grade as crud_grade, task as crud_task, task_response as crud_task_response
from coursehub.crud.course import course as crud_course
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.crud.progress import progress as crud_progress
from coursehub.models.course import Course
from coursehub.models.course_test import CourseTest
from coursehub.models.enrollment import Enrollment
from coursehub.models.grade import Grade
from coursehub.models.progress import ProgressRecord
from coursehub.models.task import Task, TaskResponse
from coursehub.schemas.course import CourseCreate, CourseUpdate
from coursehub.schemas.user import UserContext
from coursehub.services.module import module_service
from coursehub.services.storage import IncomingFile, storage_service
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class CourseService:
    def list_courses(self, db: Session, skip: int = 0, limit: int = 100) -> List[Course]:
        return crud_course.get_multi_with_lessons(db, skip=skip, limit=limit)

    def get_course(self, db: Session, course_id: int) -> Course:
        course = crud_course.get_with_lessons(db, course_id)
        if not course:
            raise NotFoundError("Course not found.")
        return course

    def get_course_content(self, db: Session, course_id: int) -> Course:
        course = crud_course.get_with_content(db, course_id)
        if not course:
            raise NotFoundError("Course not found.")
        return course

    def create_course(
        self, db: Session, course_in: CourseCreate, context: UserContext, image: Optional[IncomingFile] = None
    ) -> Course:
        PermissionHelper.require_admin(context)

        image_url = storage_service.save(image) if image else None
        try:
            course = crud_course.create(db, obj_in={**course_in.model_dump(), "image": image_url})
        except Exception:
            storage_service.delete(image_url)
            raise
        logger.info(f"Course {course.id} created by admin {context.id}")
        return course

    def update_course(
        self, db: Session, course_id: int, course_in: CourseUpdate, context: UserContext,
        image: Optional[IncomingFile] = None,
    ) -> Course:
        PermissionHelper.require_admin(context)
        course = crud_course.get(db, id=course_id)
        if not course:
            raise NotFoundError("Course not found.")

        update_data = course_in.model_dump(exclude_unset=True, exclude_none=True)
        old_image = course.image
        new_image = storage_service.save(image) if image else None
        if new_image:
            update_data["image"] = new_image

        try:
            course = crud_course.update(db, db_obj=course, obj_in=update_data)
        except Exception:
            storage_service.delete(new_image)
            raise

        if new_image and old_image and old_image != new_image:
            storage_service.delete_after_commit(db, [old_image])
        return course

    def delete_course(self, db: Session, course_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        course = crud_course.get(db, id=course_id)
        if not course:
            raise NotFoundError("Course not found.")

        urls = [course.image] if course.image else []
        task_ids = [row.id for row in db.query(Task.id).filter(Task.course_id == course.id)]
        if task_ids:
            urls += [
                row.url for row in db.query(TaskResponse.url).filter(TaskResponse.task_id.in_(task_ids))
            ]
            crud_task_response.delete_where(db, TaskResponse.task_id.in_(task_ids))

        crud_progress.delete_where(db, ProgressRecord.course_id == course.id)
        crud_enrollment.delete_where(db, Enrollment.course_id == course.id)
        crud_grade.delete_where(db, Grade.course_id == course.id)
        crud_task.delete_where(db, Task.course_id == course.id)
        crud_course_test.delete_where(db, CourseTest.course_id == course.id)
        for module in list(course.modules):
            urls += module_service.purge(db, module)
        crud_course.delete_where(db, Course.id == course.id)
        db.expire_all()

        storage_service.delete_after_commit(db, urls)
        logger.info(f"Course {course_id} deleted by admin {context.id}")


course_service = CourseService()
