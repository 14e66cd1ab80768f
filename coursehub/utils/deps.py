import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from coursehub.core.database import SessionLocal
from coursehub.core.exceptions import AuthenticationError
from coursehub.core.security import decode_access_token
from coursehub.crud.user import user as user_crud
from coursehub.schemas.token import TokenPayload
from coursehub.schemas.user import UserContext
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)

# auto_error=False so a missing header reaches the 401 below instead of FastAPI's 403
http_bearer = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_transactional_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

def get_current_user(
    db: Session = Depends(get_db),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(http_bearer),
) -> UserContext:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authentication required.")

    try:
        payload = decode_access_token(credentials.credentials)
        token_data = TokenPayload(**payload)
    except JWTError:
        raise AuthenticationError("Could not validate credentials.")
    except ValidationError:
        raise AuthenticationError("Invalid token payload.")

    user = user_crud.get(db, id=token_data.id)
    if not user:
        logger.info(f"Token presented for missing user {token_data.id}")
        raise AuthenticationError("User not found.")

    return UserContext(id=user.id, email=user.email, role=user.role, name=user.full_name)

def require_admin(context: UserContext = Depends(get_current_user)) -> UserContext:
    PermissionHelper.require_admin(context)
    return context
