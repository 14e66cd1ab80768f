from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coursehub.schemas.enrollment import Enrollment, EnrollmentCreate, EnrollmentUpdate
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment import enrollment_service
from coursehub.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[List[Enrollment]])
def list_my_enrollments(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    enrollments = enrollment_service.list_own(db, context)
    return APIResponse(message="Enrollments retrieved successfully", data=[Enrollment.model_validate(e) for e in enrollments])


@router.post("", response_model=APIResponse[Enrollment], status_code=status.HTTP_201_CREATED)
def create_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_in: EnrollmentCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    enrollment = enrollment_service.create_enrollment(db, enrollment_in, context)
    return APIResponse(message="Enrollment created successfully", data=Enrollment.model_validate(enrollment))


@router.put("/{enrollment_id}", response_model=APIResponse[Enrollment])
def update_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    enrollment_in: EnrollmentUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    enrollment = enrollment_service.update_enrollment(db, enrollment_id, enrollment_in, context)
    return APIResponse(message="Enrollment updated successfully", data=Enrollment.model_validate(enrollment))


@router.delete("/{enrollment_id}", response_model=APIResponse[None])
def delete_enrollment(
    *,
    db: Session = Depends(deps.get_transactional_db),
    enrollment_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    enrollment_service.delete_enrollment(db, enrollment_id, context)
    return APIResponse(message="Enrollment deleted successfully")
