import logging
from sqlalchemy.orm import Session

from coursehub.core.exceptions import AuthenticationError
from coursehub.core.security import create_access_token, verify_password
from coursehub.crud.user import user as crud_user
from coursehub.models.user import User
from coursehub.schemas.token import LoginRequest, LoginResponse, Token
from coursehub.schemas.user import User as UserSchema

logger = logging.getLogger(__name__)


class AuthService:
    def issue_token(self, user: User) -> Token:
        claims = {
            "id": user.id,
            "email": user.email,
            "role": user.role.value,
            "name": user.full_name,
        }
        return Token(access_token=create_access_token(claims))

    def login(self, db: Session, login_in: LoginRequest) -> LoginResponse:
        user = crud_user.get_by_email(db, email=login_in.email)
        if not user or not verify_password(login_in.password, user.hashed_password):
            logger.info(f"Failed login for {login_in.email}")
            raise AuthenticationError("Invalid email or password.")

        logger.info(f"User {user.id} logged in")
        return LoginResponse(token=self.issue_token(user), user=UserSchema.model_validate(user))


auth_service = AuthService()
