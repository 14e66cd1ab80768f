import logging
from typing import List

from sqlalchemy.orm import Session

from coursehub.core.constants import ContentKindEnum
from coursehub.core.exceptions import NotFoundError
from coursehub.crud.forum import forum as crud_forum
from coursehub.models.forum import Forum
from coursehub.schemas.forum import ForumCreate
from coursehub.schemas.user import UserContext
from coursehub.services.enrollment_guard import enrollment_guard
from coursehub.services.module import module_service
from coursehub.services.ordinal import ordinal_service
from coursehub.utils.permission import PermissionHelper

logger = logging.getLogger(__name__)


class ForumService:
    def _get_forum_or_404(self, db: Session, forum_id: int) -> Forum:
        forum = crud_forum.get(db, id=forum_id)
        if not forum:
            raise NotFoundError("Forum not found.")
        return forum

    def list_forums(self, db: Session, context: UserContext) -> List[Forum]:
        if PermissionHelper.is_admin(context):
            return crud_forum.get_by_courses(db, course_ids=None)
        return crud_forum.get_by_courses(db, course_ids=enrollment_guard.active_course_ids(db, context.id))

    def create_forum(self, db: Session, forum_in: ForumCreate, context: UserContext) -> Forum:
        PermissionHelper.require_admin(context)
        module = module_service.get_module_or_404(db, forum_in.module_id)
        position = ordinal_service.place(db, ContentKindEnum.FORUMS, module.id, forum_in.order)
        forum = crud_forum.create(
            db,
            obj_in={"module_id": module.id, "course_id": module.course_id, "title": forum_in.title, "order": position},
        )
        logger.info(f"Forum {forum.id} created in module {module.id}")
        return forum

    def delete_forum(self, db: Session, forum_id: int, context: UserContext) -> None:
        PermissionHelper.require_admin(context)
        forum = self._get_forum_or_404(db, forum_id)
        module_id = forum.module_id
        crud_forum.delete_where(db, Forum.id == forum.id)
        db.expire_all()
        ordinal_service.close_gap(db, ContentKindEnum.FORUMS, module_id)


forum_service = ForumService()
