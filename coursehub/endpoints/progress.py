from typing import List
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub.schemas.progress import CourseCompletion, ProgressRecord, ProgressUpdate, StudentProgress
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.progress import progress_service
from coursehub.utils import deps

router = APIRouter()


# Declared before /{user_id}/... so "admin" is never parsed as a user id
@router.get("/admin/courses/{course_id}", response_model=APIResponse[List[StudentProgress]])
def course_progress_report(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.require_admin)
):
    report = progress_service.course_report(db, course_id)
    return APIResponse(message="Course progress report retrieved successfully", data=report)


@router.get("/{user_id}", response_model=APIResponse[List[ProgressRecord]])
def read_progress(
    *,
    db: Session = Depends(deps.get_db),
    user_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    records = progress_service.read_progress(db, user_id, context)
    return APIResponse(message="Progress retrieved successfully", data=[ProgressRecord.model_validate(r) for r in records])


@router.put("/{user_id}", response_model=APIResponse[ProgressRecord])
def update_progress(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    progress_in: ProgressUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    record = progress_service.update_progress(db, user_id, progress_in, context)
    return APIResponse(message="Progress updated successfully", data=ProgressRecord.model_validate(record))


@router.get("/{user_id}/courses/{course_id}", response_model=APIResponse[CourseCompletion])
def read_course_completion(
    *,
    db: Session = Depends(deps.get_db),
    user_id: int,
    course_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    completion = progress_service.read_completion(db, user_id, course_id, context)
    return APIResponse(message="Course completion retrieved successfully", data=completion)
