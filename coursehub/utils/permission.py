from coursehub.core.constants import RoleEnum
from coursehub.core.exceptions import AuthorizationError
from coursehub.schemas.user import UserContext


class PermissionHelper:
    @staticmethod
    def is_admin(context: UserContext) -> bool:
        return context.role == RoleEnum.ADMIN

    @staticmethod
    def is_student(context: UserContext) -> bool:
        return context.role == RoleEnum.STUDENT

    @staticmethod
    def is_self_or_admin(context: UserContext, user_id: int) -> bool:
        return context.id == user_id or PermissionHelper.is_admin(context)

    @staticmethod
    def require_admin(context: UserContext):
        if not PermissionHelper.is_admin(context):
            raise AuthorizationError("Only administrators can perform this action.")

    @staticmethod
    def require_self(context: UserContext, user_id: int):
        if context.id != user_id:
            raise AuthorizationError("You can only change your own account.")

    @staticmethod
    def require_self_or_admin(context: UserContext, user_id: int):
        if not PermissionHelper.is_self_or_admin(context, user_id):
            raise AuthorizationError("You do not have permission to access another user's data.")
