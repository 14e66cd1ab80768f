from typing import List, Optional
from fastapi import APIRouter, Depends, File, Form, UploadFile, status
from sqlalchemy.orm import Session

from coursehub.schemas.content import (
    Lesson, LessonCreate, LessonUpdate, LiveSession, LiveSessionCreate, QuizAnswer, QuizCreate,
    QuizDetail, QuizResult, Upload, UploadCreate, Video, VideoCreate,
)
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.content import content_service
from coursehub.utils import deps
from coursehub.utils.forms import parse_form, read_upload

router = APIRouter()


@router.post("/lessons", response_model=APIResponse[Lesson], status_code=status.HTTP_201_CREATED, tags=["Lessons"])
def create_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_in: LessonCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    lesson = content_service.create_lesson(db, lesson_in, context)
    return APIResponse(message="Lesson created successfully", data=Lesson.model_validate(lesson))


@router.put("/lessons/{lesson_id}", response_model=APIResponse[Lesson], tags=["Lessons"])
def update_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    lesson_in: LessonUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    lesson = content_service.update_lesson(db, lesson_id, lesson_in, context)
    return APIResponse(message="Lesson updated successfully", data=Lesson.model_validate(lesson))


@router.delete("/lessons/{lesson_id}", response_model=APIResponse[None], tags=["Lessons"])
def delete_lesson(
    *,
    db: Session = Depends(deps.get_transactional_db),
    lesson_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    content_service.delete_lesson(db, lesson_id, context)
    return APIResponse(message="Lesson deleted successfully")


@router.post("/videos", response_model=APIResponse[Video], status_code=status.HTTP_201_CREATED, tags=["Videos"])
def create_video(
    *,
    db: Session = Depends(deps.get_transactional_db),
    context: UserContext = Depends(deps.require_admin),
    module_id: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    order: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
):
    video_in = parse_form(VideoCreate, {"module_id": module_id, "title": title, "order": order})
    video = content_service.create_video(db, video_in, read_upload(file), context)
    return APIResponse(message="Video created successfully", data=Video.model_validate(video))


@router.delete("/videos/{video_id}", response_model=APIResponse[None], tags=["Videos"])
def delete_video(
    *,
    db: Session = Depends(deps.get_transactional_db),
    video_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    content_service.delete_video(db, video_id, context)
    return APIResponse(message="Video deleted successfully")


@router.post("/liveSessions", response_model=APIResponse[LiveSession], status_code=status.HTTP_201_CREATED, tags=["Live Sessions"])
def create_live_session(
    *,
    db: Session = Depends(deps.get_transactional_db),
    session_in: LiveSessionCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    live_session = content_service.create_live_session(db, session_in, context)
    return APIResponse(message="Live session created successfully", data=LiveSession.model_validate(live_session))


@router.delete("/liveSessions/{session_id}", response_model=APIResponse[None], tags=["Live Sessions"])
def delete_live_session(
    *,
    db: Session = Depends(deps.get_transactional_db),
    session_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    content_service.delete_live_session(db, session_id, context)
    return APIResponse(message="Live session deleted successfully")


@router.post("/quizzes", response_model=APIResponse[QuizDetail], status_code=status.HTTP_201_CREATED, tags=["Quizzes"])
def create_quiz(
    *,
    db: Session = Depends(deps.get_transactional_db),
    quiz_in: QuizCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    quiz = content_service.create_quiz(db, quiz_in, context)
    return APIResponse(message="Quiz created successfully", data=QuizDetail.model_validate(quiz))


@router.delete("/quizzes/{quiz_id}", response_model=APIResponse[None], tags=["Quizzes"])
def delete_quiz(
    *,
    db: Session = Depends(deps.get_transactional_db),
    quiz_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    content_service.delete_quiz(db, quiz_id, context)
    return APIResponse(message="Quiz deleted successfully")


@router.post("/quizzes/{quiz_id}/responses", response_model=APIResponse[QuizResult], status_code=status.HTTP_201_CREATED, tags=["Quizzes"])
def submit_quiz_response(
    *,
    db: Session = Depends(deps.get_transactional_db),
    quiz_id: int,
    answer_in: QuizAnswer,
    context: UserContext = Depends(deps.get_current_user)
):
    result = content_service.submit_quiz_response(db, quiz_id, answer_in, context)
    return APIResponse(message="Response recorded", data=result)


@router.post("/uploads", response_model=APIResponse[Upload], status_code=status.HTTP_201_CREATED, tags=["Uploads"])
def create_upload(
    *,
    db: Session = Depends(deps.get_transactional_db),
    context: UserContext = Depends(deps.require_admin),
    module_id: Optional[str] = Form(None),
    title: Optional[str] = Form(None),
    instructions: Optional[str] = Form(None),
    order: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
):
    upload_in = parse_form(UploadCreate, {
        "module_id": module_id,
        "title": title,
        "instructions": instructions,
        "order": order,
    })
    upload = content_service.create_upload(db, upload_in, read_upload(file), context)
    return APIResponse(message="Upload created successfully", data=Upload.model_validate(upload))


@router.get("/uploads/{module_id:int}", response_model=APIResponse[List[Upload]], tags=["Uploads"])
def list_uploads(
    *,
    db: Session = Depends(deps.get_db),
    module_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    uploads = content_service.list_uploads(db, module_id, context)
    return APIResponse(message="Uploads retrieved successfully", data=[Upload.model_validate(u) for u in uploads])


@router.delete("/uploads/{upload_id}", response_model=APIResponse[None], tags=["Uploads"])
def delete_upload(
    *,
    db: Session = Depends(deps.get_transactional_db),
    upload_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    content_service.delete_upload(db, upload_id, context)
    return APIResponse(message="Upload deleted successfully")
