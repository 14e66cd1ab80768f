from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coursehub.schemas.forum import Forum, ForumCreate
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.forum import forum_service
from coursehub.utils import deps

router = APIRouter()


@router.get("", response_model=APIResponse[List[Forum]])
def list_forums(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    forums = forum_service.list_forums(db, context)
    return APIResponse(message="Forums retrieved successfully", data=[Forum.model_validate(f) for f in forums])


@router.post("", response_model=APIResponse[Forum], status_code=status.HTTP_201_CREATED)
def create_forum(
    *,
    db: Session = Depends(deps.get_transactional_db),
    forum_in: ForumCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    forum = forum_service.create_forum(db, forum_in, context)
    return APIResponse(message="Forum created successfully", data=Forum.model_validate(forum))


@router.delete("/{forum_id}", response_model=APIResponse[None])
def delete_forum(
    *,
    db: Session = Depends(deps.get_transactional_db),
    forum_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    forum_service.delete_forum(db, forum_id, context)
    return APIResponse(message="Forum deleted successfully")

