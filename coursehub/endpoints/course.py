from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from coursehub.core.constants import REORDER_PATH_KINDS
from coursehub.core.exceptions import NotFoundError
from coursehub.schemas.course import Course, CourseContent, CourseCreate, CourseDetail, CourseUpdate
from coursehub.schemas.enrollment import CourseStudent
from coursehub.schemas.reorder import ReorderedItem, ReorderRequest
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.course import course_service
from coursehub.services.enrollment import enrollment_service
from coursehub.services.module import module_service
from coursehub.utils import deps
from coursehub.utils.forms import parse_form, read_upload

router = APIRouter()


@router.get("", response_model=APIResponse[List[CourseDetail]])
def list_courses(
    db: Session = Depends(deps.get_db),
    skip: int = 0,
    limit: int = 100
):
    courses = course_service.list_courses(db, skip=skip, limit=limit)
    return APIResponse(message="Courses retrieved successfully", data=[CourseDetail.model_validate(c) for c in courses])


@router.post("", response_model=APIResponse[Course], status_code=status.HTTP_201_CREATED)
def create_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    context: UserContext = Depends(deps.require_admin),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    modality: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    status_: Optional[str] = Form(None, alias="status"),
    image: Optional[UploadFile] = File(None),
):
    course_in = parse_form(CourseCreate, {
        "title": title,
        "description": description,
        "modality": modality,
        "duration": duration,
        "price": price,
        "status": status_,
    })
    course = course_service.create_course(db, course_in, context, image=read_upload(image))
    return APIResponse(message="Course created successfully", data=Course.model_validate(course))


@router.get("/{course_id}", response_model=APIResponse[CourseDetail])
def read_course(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int
):
    course = course_service.get_course(db, course_id)
    return APIResponse(message="Course retrieved successfully", data=CourseDetail.model_validate(course))


@router.get("/{course_id}/content", response_model=APIResponse[CourseContent])
def read_course_content(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int
):
    course = course_service.get_course_content(db, course_id)
    return APIResponse(message="Course content retrieved successfully", data=CourseContent.model_validate(course))


@router.put("/{course_id}", response_model=APIResponse[Course])
def update_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    context: UserContext = Depends(deps.require_admin),
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    modality: Optional[str] = Form(None),
    duration: Optional[str] = Form(None),
    price: Optional[str] = Form(None),
    status_: Optional[str] = Form(None, alias="status"),
    image: Optional[UploadFile] = File(None),
):
    course_in = parse_form(CourseUpdate, {
        "title": title,
        "description": description,
        "modality": modality,
        "duration": duration,
        "price": price,
        "status": status_,
    })
    course = course_service.update_course(db, course_id, course_in, context, image=read_upload(image))
    return APIResponse(message="Course updated successfully", data=Course.model_validate(course))


@router.delete("/{course_id}", response_model=APIResponse[None])
def delete_course(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    course_service.delete_course(db, course_id, context)
    return APIResponse(message="Course deleted successfully")


@router.get("/{course_id}/students", response_model=APIResponse[List[CourseStudent]])
def list_course_students(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    students = enrollment_service.list_course_students(db, course_id, context)
    return APIResponse(message="Course students retrieved successfully", data=students)


@router.put("/{course_id}/reorder-modulos", response_model=APIResponse[List[ReorderedItem]])
def reorder_modules(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    reorder_in: ReorderRequest,
    context: UserContext = Depends(deps.get_current_user)
):
    modules = module_service.reorder_modules(db, course_id, reorder_in, context)
    return APIResponse(message="Modules reordered successfully", data=[ReorderedItem.model_validate(m) for m in modules])


@router.put("/{course_id}/modulos/{module_id}/reorder-{kind}", response_model=APIResponse[List[ReorderedItem]])
def reorder_module_content(
    *,
    db: Session = Depends(deps.get_transactional_db),
    course_id: int,
    module_id: int,
    kind: str,
    reorder_in: ReorderRequest,
    context: UserContext = Depends(deps.get_current_user)
):
    if kind not in REORDER_PATH_KINDS:
        raise NotFoundError(f"Unknown content kind '{kind}'.")
    items = module_service.reorder_content(db, course_id, module_id, REORDER_PATH_KINDS[kind], reorder_in, context)
    return APIResponse(message=f"{kind} reordered successfully", data=[ReorderedItem.model_validate(i) for i in items])
