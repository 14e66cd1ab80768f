import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from coursehub.core.config import settings
from coursehub.core.constants import RoleEnum
from coursehub.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from coursehub.core.security import get_password_hash, verify_password
from coursehub.crud.enrollment import enrollment as crud_enrollment
from coursehub.crud.user import user as crud_user
from coursehub.models.user import User
from coursehub.schemas.user import Classmate, UserCreate, UserUpdate
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment_guard import enrollment_guard
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class UserService:
    def _create(self, db: Session, user_in: UserCreate) -> User:
        if crud_user.get_by_email(db, email=user_in.email):
            raise ConflictError("A user with this email already exists.", details={"email": user_in.email})
        return crud_user.create(
            db,
            obj_in={
                "full_name": user_in.full_name,
                "email": user_in.email,
                "hashed_password": get_password_hash(user_in.password),
                "role": RoleEnum(user_in.role),
            },
        )

    def create_user(self, db: Session, user_in: UserCreate, context: UserContext) -> User:
        PermissionHelper.require_admin(context)
        user = self._create(db, user_in)
        logger.info(f"User {user.id} created by admin {context.id} with role {user.role.value}")
        return user

    def update_user(self, db: Session, user_id: int, user_in: UserUpdate, context: UserContext) -> User:
        PermissionHelper.require_self(context, user_id)
        user = crud_user.get(db, id=user_id)
        if not user:
            raise NotFoundError("User not found.")

        if user_in.new_password:
            if not user_in.current_password:
                raise ValidationError("current_password is required to change the password.")
            if not verify_password(user_in.current_password, user.hashed_password):
                raise AuthenticationError("Current password is incorrect.")
            user.hashed_password = get_password_hash(user_in.new_password)

        if user_in.full_name:
            user.full_name = user_in.full_name.strip()

        db.add(user)
        db.flush()
        db.refresh(user)
        logger.info(f"User {user.id} updated their profile")
        return user

    def list_classmates(self, db: Session, context: UserContext) -> List[Classmate]:
        course_ids = enrollment_guard.active_course_ids(db, context.id)
        classmates = []
        for user in crud_user.get_classmates(db, user_id=context.id, course_ids=course_ids):
            classmates.append(
                Classmate(
                    id=user.id,
                    full_name=user.full_name,
                    email=user.email,
                    role=user.role,
                    courses=crud_enrollment.get_active_course_titles(db, user_id=user.id, course_ids=course_ids),
                )
            )
        return classmates

    def ensure_first_admin(self, db: Session) -> Optional[User]:
        """Creates the bootstrap admin from settings when the store has no admin yet."""
        if not settings.FIRST_ADMIN_EMAIL or not settings.FIRST_ADMIN_PASSWORD:
            return None
        if crud_user.get_first_admin(db):
            return None

        admin = self._create(
            db,
            UserCreate(
                full_name=settings.FIRST_ADMIN_NAME,
                email=settings.FIRST_ADMIN_EMAIL,
                password=settings.FIRST_ADMIN_PASSWORD,
                role=RoleEnum.ADMIN,
            ),
        )
        db.commit()
        logger.info(f"Bootstrap admin {admin.email} created")
        return admin


user_service = UserService()
