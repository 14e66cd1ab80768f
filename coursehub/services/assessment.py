import logging
from typing import List

from sqlalchemy.orm import Session

from coursehub.core.constants import TaskStatusEnum
from coursehub.core.exceptions import NotFoundError
from coursehub.crud.assessment import course_test as crud_course_test, grade as crud_grade, task as crud_task, task_response as crud_task_response
from coursehub.crud.course import course as crud_course
from coursehub.crud.user import user as crud_user
from coursehub.models.course_test import CourseTest
from coursehub.models.grade import Grade
from coursehub.models.task import Task, TaskResponse
from coursehub.schemas.task import CourseTestCreate, CourseTestUpdate, GradeCreate, TaskCreate, TaskUpdate
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment_guard import enrollment_guard
from coursehub.services.storage import IncomingFile, storage_service
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class AssessmentService:
    """Tasks, tests and grades, all scoped to a course."""

    def _require_course(self, db: Session, course_id: int) -> None:
        if not crud_course.get(db, id=course_id):
            raise NotFoundError("Course not found.")

    def _visible_course_ids(self, db: Session, context: UserContext):
        if PermissionHelper.is_admin(context):
            return None
        return enrollment_guard.active_course_ids(db, context.id)

    # Tasks

    def list_tasks(self, db: Session, context: UserContext) -> List[Task]:
        return crud_task.get_by_courses(db, course_ids=self._visible_course_ids(db, context))

    def create_task(self, db: Session, task_in: TaskCreate, context: UserContext) -> Task:
        PermissionHelper.require_admin(context)
        self._require_course(db, task_in.course_id)
        return crud_task.create(db, obj_in=task_in)

    def update_task(self, db: Session, task_id: int, task_in: TaskUpdate, context: UserContext) -> Task:
        task = crud_task.get(db, id=task_id)
        if not task:
            raise NotFoundError("Task not found.")
        enrollment_guard.require_course_access(db, context, task.course_id)
        return crud_task.update(db, db_obj=task, obj_in=task_in)

    def delete_task(self, db: Session, task_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        task = crud_task.get(db, id=task_id)
        if not task:
            raise NotFoundError("Task not found.")
        urls = [response.url for response in task.responses]
        crud_task_response.delete_where(db, TaskResponse.task_id == task.id)
        crud_task.delete_where(db, Task.id == task.id)
        storage_service.delete_after_commit(db, urls)

    def submit_task_response(self, db: Session, task_id: int, file: IncomingFile, context: UserContext) -> TaskResponse:
        task = crud_task.get(db, id=task_id)
        if not task:
            raise NotFoundError("Task not found.")
        enrollment_guard.require_active_enrollment(db, context.id, task.course_id)

        url = storage_service.save(file)
        try:
            response = crud_task_response.create(
                db, obj_in={"task_id": task.id, "user_id": context.id, "url": url}
            )
            crud_task.update(db, db_obj=task, obj_in={"status": TaskStatusEnum.SUBMITTED})
        except Exception:
            storage_service.delete(url)
            raise
        logger.info(f"User {context.id} submitted a response to task {task.id}")
        return response

    # Tests

    def list_tests(self, db: Session, context: UserContext) -> List[CourseTest]:
        return crud_course_test.get_by_courses(db, course_ids=self._visible_course_ids(db, context))

    def create_test(self, db: Session, test_in: CourseTestCreate, context: UserContext) -> CourseTest:
        PermissionHelper.require_admin(context)
        self._require_course(db, test_in.course_id)
        return crud_course_test.create(db, obj_in=test_in)

    def update_test(self, db: Session, test_id: int, test_in: CourseTestUpdate, context: UserContext) -> CourseTest:
        course_test = crud_course_test.get(db, id=test_id)
        if not course_test:
            raise NotFoundError("Test not found.")
        enrollment_guard.require_course_access(db, context, course_test.course_id)
        return crud_course_test.update(db, db_obj=course_test, obj_in=test_in)

    def delete_test(self, db: Session, test_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        if not crud_course_test.delete(db, id=test_id):
            raise NotFoundError("Test not found.")

    # Grades

    def list_grades(self, db: Session, context: UserContext) -> List[Grade]:
        return crud_grade.get_by_user(db, user_id=context.id)

    def create_grade(self, db: Session, grade_in: GradeCreate, context: UserContext) -> Grade:
        PermissionHelper.require_admin(context)
        if not crud_user.get(db, id=grade_in.user_id):
            raise NotFoundError("User not found.")
        self._require_course(db, grade_in.course_id)
        return crud_grade.create(db, obj_in=grade_in)


assessment_service = AssessmentService()
