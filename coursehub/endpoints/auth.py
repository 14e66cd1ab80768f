from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub.schemas.response import APIResponse
from coursehub.schemas.token import LoginRequest, LoginResponse
from coursehub.services.auth import auth_service
from coursehub.utils import deps

router = APIRouter()


@router.post("/login", response_model=APIResponse[LoginResponse])
def login(
    *,
    db: Session = Depends(deps.get_db),
    login_in: LoginRequest,
):
    result = auth_service.login(db, login_in)
    return APIResponse(message="Login successful", data=result)
