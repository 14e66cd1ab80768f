from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from coursehub.schemas.progress import Certificate
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.certificate import certificate_service
from coursehub.utils import deps

router = APIRouter()


@router.get("/{course_id}", response_model=APIResponse[Certificate])
def read_certificate(
    *,
    db: Session = Depends(deps.get_db),
    course_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    certificate = certificate_service.get_certificate(db, context.id, course_id)
    return APIResponse(message="Certificate issued", data=certificate)
