from typing import List
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import Classmate, User, UserContext, UserCreate, UserUpdate
from coursehub.services.user import user_service
from coursehub.utils import deps

router = APIRouter()


@router.post("", response_model=APIResponse[User], status_code=status.HTTP_201_CREATED)
def create_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_in: UserCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    user = user_service.create_user(db, user_in, context)
    return APIResponse(message="User created successfully", data=User.model_validate(user))


@router.get("", response_model=APIResponse[List[Classmate]])
def list_classmates(
    db: Session = Depends(deps.get_db),
    context: UserContext = Depends(deps.get_current_user)
):
    classmates = user_service.list_classmates(db, context)
    return APIResponse(message="Users retrieved successfully", data=classmates)


@router.put("/{user_id}", response_model=APIResponse[User])
def update_user(
    *,
    db: Session = Depends(deps.get_transactional_db),
    user_id: int,
    user_in: UserUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    user = user_service.update_user(db, user_id, user_in, context)
    return APIResponse(message="User updated successfully", data=User.model_validate(user))
