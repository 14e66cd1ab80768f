from typing import List, Optional
from sqlalchemy.orm import Session

from coursehub.crud.base import CRUDBase
from coursehub.models.forum import Forum
from coursehub.schemas.forum import ForumCreate


class CRUDForum(CRUDBase[Forum, ForumCreate, ForumCreate]):
    def get_by_courses(self, db: Session, *, course_ids: Optional[List[int]]) -> List[Forum]:
        """Forums of the given courses; ``None`` means every course."""
        query = db.query(Forum)
        if course_ids is not None:
            if not course_ids:
                return []
            query = query.filter(Forum.course_id.in_(course_ids))
        return query.order_by(Forum.course_id, Forum.module_id, Forum.order).all()


forum = CRUDForum(Forum)
