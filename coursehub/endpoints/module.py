from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from coursehub.schemas.module import Module, ModuleCreate, ModuleUpdate
from coursehub.schemas.response import APIResponse
from coursehub.schemas.user import UserContext
from coursehub.services.module import module_service
from coursehub.utils import deps

router = APIRouter()


@router.post("", response_model=APIResponse[Module], status_code=status.HTTP_201_CREATED)
def create_module(
    *,
    db: Session = Depends(deps.get_transactional_db),
    module_in: ModuleCreate,
    context: UserContext = Depends(deps.get_current_user)
):
    module = module_service.create_module(db, module_in, context)
    return APIResponse(message="Module created successfully", data=Module.model_validate(module))


@router.put("/{module_id}", response_model=APIResponse[Module])
def update_module(
    *,
    db: Session = Depends(deps.get_transactional_db),
    module_id: int,
    module_in: ModuleUpdate,
    context: UserContext = Depends(deps.get_current_user)
):
    module = module_service.update_module(db, module_id, module_in, context)
    return APIResponse(message="Module updated successfully", data=Module.model_validate(module))


@router.delete("/{module_id}", response_model=APIResponse[None])
def delete_module(
    *,
    db: Session = Depends(deps.get_transactional_db),
    module_id: int,
    context: UserContext = Depends(deps.get_current_user)
):
    module_service.delete_module(db, module_id, context)
    return APIResponse(message="Module deleted successfully")
