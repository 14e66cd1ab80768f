from typing import List, Optional
from fastapi import APIRouter, Depends, File, UploadFile, status
from sqlalchemy.orm import Session

from coursehub.core.exceptions import ValidationError
from coursehub.schemas.response import APIResponse
from coursehub.schemas.task import (
    CourseTest, CourseTestCreate, CourseTestUpdate, Grade, GradeCreate, Task, TaskCreate, TaskResponse, TaskUpdate,
)
from coursehub.schemas.user import UserContext
from coursehub.services.assessment import assessment_service
from coursehub.utils import deps
from coursehub.utils.forms import read_upload

router = APIRouter()


@router.get("/tasks", response_model=APIResponse[List[Task]], tags=["Tasks"])
def list_tasks(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    tasks = assessment_service.list_tasks(db, context)
    return APIResponse(message="Tasks retrieved successfully", data=[Task.model_validate(t) for t in tasks])


@router.post("/tasks", response_model=APIResponse[Task], status_code=status.HTTP_201_CREATED, tags=["Tasks"])
def create_task(
    *,
    db: Session = Depends(deps.get_transactional_db),
    task_in: TaskCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    task = assessment_service.create_task(db, task_in, context)
    return APIResponse(message="Task created successfully", data=Task.model_validate(task))


@router.put("/tasks/{task_id}", response_model=APIResponse[Task], tags=["Tasks"])
def update_task(
    *,
    db: Session = Depends(deps.get_transactional_db),
    task_id: int,
    task_in: TaskUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    task = assessment_service.update_task(db, task_id, task_in, context)
    return APIResponse(message="Task updated successfully", data=Task.model_validate(task))


@router.delete("/tasks/{task_id}", response_model=APIResponse[None], tags=["Tasks"])
def delete_task(
    *,
    db: Session = Depends(deps.get_transactional_db),
    task_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    assessment_service.delete_task(db, task_id, context)
    return APIResponse(message="Task deleted successfully")


@router.post("/tasks/{task_id}/response", response_model=APIResponse[TaskResponse], status_code=status.HTTP_201_CREATED, tags=["Tasks"])
def submit_task_response(
    *,
    db: Session = Depends(deps.get_transactional_db),
    task_id: int,
    context: UserContext = Depends(deps.get_current_user),
    file: Optional[UploadFile] = File(None),
):
    incoming = read_upload(file)
    if incoming is None:
        raise ValidationError("A file is required.")
    response = assessment_service.submit_task_response(db, task_id, incoming, context)
    return APIResponse(message="Task response submitted", data=TaskResponse.model_validate(response))


@router.get("/tests", response_model=APIResponse[List[CourseTest]], tags=["Tests"])
def list_tests(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    tests = assessment_service.list_tests(db, context)
    return APIResponse(message="Tests retrieved successfully", data=[CourseTest.model_validate(t) for t in tests])


@router.post("/tests", response_model=APIResponse[CourseTest], status_code=status.HTTP_201_CREATED, tags=["Tests"])
def create_test(
    *,
    db: Session = Depends(deps.get_transactional_db),
    test_in: CourseTestCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    course_test = assessment_service.create_test(db, test_in, context)
    return APIResponse(message="Test created successfully", data=CourseTest.model_validate(course_test))


@router.put("/tests/{test_id}", response_model=APIResponse[CourseTest], tags=["Tests"])
def update_test(
    *,
    db: Session = Depends(deps.get_transactional_db),
    test_id: int,
    test_in: CourseTestUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    course_test = assessment_service.update_test(db, test_id, test_in, context)
    return APIResponse(message="Test updated successfully", data=CourseTest.model_validate(course_test))


@router.delete("/tests/{test_id}", response_model=APIResponse[None], tags=["Tests"])
def delete_test(
    *,
    db: Session = Depends(deps.get_transactional_db),
    test_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    assessment_service.delete_test(db, test_id, context)
    return APIResponse(message="Test deleted successfully")


@router.get("/grades", response_model=APIResponse[List[Grade]], tags=["Grades"])
def list_grades(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    grades = assessment_service.list_grades(db, context)
    return APIResponse(message="Grades retrieved successfully", data=[Grade.model_validate(g) for g in grades])


@router.post("/grades", response_model=APIResponse[Grade], status_code=status.HTTP_201_CREATED, tags=["Grades"])
def create_grade(
    *,
    db: Session = Depends(deps.get_transactional_db),
    grade_in: GradeCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    grade = assessment_service.create_grade(db, grade_in, context)
    return APIResponse(message="Grade recorded successfully", data=Grade.model_validate(grade))
