import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sqlalchemy import func, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from coursehub.core.constants import ContentKindEnum
from coursehub.core.exceptions import ConflictError, InternalError, ValidationError
from coursehub.models.content import Lesson, LiveSession, Quiz, Upload, Video
from coursehub.models.course import Course
from coursehub.models.forum import Forum
from coursehub.models.module import Module

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OrdinalScope:
    kind: ContentKindEnum
    model: Any
    parent_model: Any
    parent_attr: str

    @property
    def parent_column(self):
        return getattr(self.model, self.parent_attr)


SCOPES: Dict[ContentKindEnum, OrdinalScope] = {
    ContentKindEnum.MODULES: OrdinalScope(ContentKindEnum.MODULES, Module, Course, "course_id"),
    ContentKindEnum.LESSONS: OrdinalScope(ContentKindEnum.LESSONS, Lesson, Module, "module_id"),
    ContentKindEnum.VIDEOS: OrdinalScope(ContentKindEnum.VIDEOS, Video, Module, "module_id"),
    ContentKindEnum.LIVE_SESSIONS: OrdinalScope(ContentKindEnum.LIVE_SESSIONS, LiveSession, Module, "module_id"),
    ContentKindEnum.QUIZZES: OrdinalScope(ContentKindEnum.QUIZZES, Quiz, Module, "module_id"),
    ContentKindEnum.UPLOADS: OrdinalScope(ContentKindEnum.UPLOADS, Upload, Module, "module_id"),
    ContentKindEnum.FORUMS: OrdinalScope(ContentKindEnum.FORUMS, Forum, Module, "module_id"),
}


class OrdinalService:
    """Keeps every reorderable collection numbered 1..N inside its parent.

    Items of a scope are siblings: modules of one course, or content of one
    kind inside one module. New items append at ``count + 1`` unless a
    position is requested; reorders replace the whole sequence at once.
    Every write to a scope first locks the parent row, so concurrent
    creates, reorders and deletes in one scope run one after another.
    """

    def scope(self, kind: ContentKindEnum) -> OrdinalScope:
        return SCOPES[ContentKindEnum(kind)]

    def _lock_parent(self, db: Session, scope: OrdinalScope, parent_id: int) -> None:
        parent = scope.parent_model
        if db.get_bind().dialect.name == "sqlite":
            # SQLite has no row locks; a no-op write takes the database write lock
            db.execute(
                update(parent)
                .where(parent.id == parent_id)
                .values(id=parent.id, updated_at=parent.updated_at)
                .execution_options(synchronize_session=False)
            )
        else:
            db.query(parent.id).filter(parent.id == parent_id).with_for_update().first()

    def _siblings(self, db: Session, scope: OrdinalScope, parent_id: int, lock: bool = False) -> List[Any]:
        query = (
            db.query(scope.model)
            .filter(scope.parent_column == parent_id)
            .order_by(scope.model.order, scope.model.id)
        )
        if lock:
            # Row locks on PostgreSQL; SQLite ignores FOR UPDATE
            query = query.with_for_update()
        return query.all()

    def count(self, db: Session, kind: ContentKindEnum, parent_id: int) -> int:
        scope = self.scope(kind)
        return (
            db.query(func.count(scope.model.id))
            .filter(scope.parent_column == parent_id)
            .scalar()
        ) or 0

    def next_order(self, db: Session, kind: ContentKindEnum, parent_id: int) -> int:
        return self.count(db, kind, parent_id) + 1

    def place(self, db: Session, kind: ContentKindEnum, parent_id: int, requested: Optional[int] = None) -> int:
        """Order for a new item; siblings at or after ``requested`` move down one."""
        self._lock_parent(db, self.scope(kind), parent_id)
        total = self.count(db, kind, parent_id)
        if requested is None:
            return total + 1
        if requested < 1:
            raise ValidationError("order must be 1 or greater.", details={"order": requested})

        position = min(requested, total + 1)
        if position <= total:
            scope = self.scope(kind)
            db.execute(
                update(scope.model)
                .where(scope.parent_column == parent_id, scope.model.order >= position)
                .values(order=scope.model.order + 1)
                .execution_options(synchronize_session="fetch")
            )
        return position

    def reorder(self, db: Session, kind: ContentKindEnum, parent_id: int, ordered_ids: List[int]) -> List[Any]:
        scope = self.scope(kind)
        self._lock_parent(db, scope, parent_id)
        siblings = self._siblings(db, scope, parent_id, lock=True)
        by_id = {item.id: item for item in siblings}

        if len(set(ordered_ids)) != len(ordered_ids):
            raise ConflictError(
                "The reorder list contains duplicate ids.",
                details={"kind": scope.kind.value, "parent_id": parent_id},
            )
        if set(ordered_ids) != set(by_id):
            raise ConflictError(
                "The reorder list must contain exactly the items of this scope.",
                details={
                    "kind": scope.kind.value,
                    "parent_id": parent_id,
                    "unknown": sorted(set(ordered_ids) - set(by_id)),
                    "missing": sorted(set(by_id) - set(ordered_ids)),
                },
            )

        try:
            for position, item_id in enumerate(ordered_ids, start=1):
                by_id[item_id].order = position
            db.flush()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Reorder of {scope.kind.value} in parent {parent_id} failed: {e}")
            raise InternalError("Could not save the new order.")

        logger.info(f"Reordered {len(ordered_ids)} {scope.kind.value} in parent {parent_id}")
        return [by_id[item_id] for item_id in ordered_ids]

    def close_gap(self, db: Session, kind: ContentKindEnum, parent_id: int) -> None:
        """Renumbers the remaining siblings 1..N after a delete, keeping their relative order."""
        scope = self.scope(kind)
        self._lock_parent(db, scope, parent_id)
        try:
            for position, item in enumerate(self._siblings(db, scope, parent_id), start=1):
                if item.order != position:
                    item.order = position
            db.flush()
        except SQLAlchemyError as e:
            logger.error(f"Renumbering {scope.kind.value} in parent {parent_id} failed: {e}")
            raise InternalError("Could not renumber the remaining items.")


ordinal_service = OrdinalService()
