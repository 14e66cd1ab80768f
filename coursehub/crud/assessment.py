from typing import List, Optional
from sqlalchemy.orm import Session

from coursehub.crud.base import CRUDBase
from coursehub.models.course_test import CourseTest
from coursehub.models.grade import Grade
from coursehub.models.quiz_response import QuizResponse
from coursehub.models.task import Task, TaskResponse
from coursehub.schemas.task import CourseTestCreate, CourseTestUpdate, GradeCreate, TaskCreate, TaskUpdate


class CRUDCourseScoped(CRUDBase):
    """Rows that hang directly off a course."""

    def get_by_courses(self, db: Session, *, course_ids: Optional[List[int]]) -> List:
        query = db.query(self.model)
        if course_ids is not None:
            if not course_ids:
                return []
            query = query.filter(self.model.course_id.in_(course_ids))
        return query.order_by(self.model.course_id, self.model.id).all()


class CRUDTask(CRUDCourseScoped, CRUDBase[Task, TaskCreate, TaskUpdate]):
    pass


class CRUDCourseTest(CRUDCourseScoped, CRUDBase[CourseTest, CourseTestCreate, CourseTestUpdate]):
    pass


class CRUDGrade(CRUDBase[Grade, GradeCreate, GradeCreate]):
    def get_by_user(self, db: Session, *, user_id: int) -> List[Grade]:
        return db.query(Grade).filter(Grade.user_id == user_id).order_by(Grade.id).all()


task = CRUDTask(Task)
task_response = CRUDBase(TaskResponse)
course_test = CRUDCourseTest(CourseTest)
grade = CRUDGrade(Grade)
quiz_response = CRUDBase(QuizResponse)
