"""CRUD operations for Comment."""

from datetime import datetime
from typing import Dict, Iterable, List, Optional

from sqlalchemy import Select, delete, desc, func, or_, select, update
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.comment import Comment, CommentStatus
from blog_api.schemas.comment import CommentCreate, CommentUpdate


def _apply_filters(
    stmt: Select,
    *,
    post_id: Optional[str] = None,
    status: Optional[str] = None,
    parent_id: Optional[str] = None,
    top_level_only: bool = False,
    search: Optional[str] = None,
) -> Select:
    if post_id:
        stmt = stmt.where(Comment.post_id == post_id)
    if status and status != "all":
        stmt = stmt.where(Comment.status == status)
    if top_level_only:
        stmt = stmt.where(Comment.parent_id.is_(None))
    elif parent_id:
        stmt = stmt.where(Comment.parent_id == parent_id)
    if search:
        pattern = f"%{search}%"
        stmt = stmt.where(
            or_(
                Comment.content.ilike(pattern),
                Comment.author_name.ilike(pattern),
                Comment.author_email.ilike(pattern),
            )
        )
    return stmt


class CRUDComment(CRUDBase[Comment, CommentCreate, CommentUpdate]):
    """CRUD operations for Comment."""

    def get_filtered(
        self,
        db: Session,
        *,
        post_id: Optional[str] = None,
        status: Optional[str] = None,
        parent_id: Optional[str] = None,
        top_level_only: bool = False,
        search: Optional[str] = None
    ) -> List[Comment]:
        """Get comments newest first."""
        stmt = _apply_filters(
            select(Comment),
            post_id=post_id,
            status=status,
            parent_id=parent_id,
            top_level_only=top_level_only,
            search=search,
        ).order_by(desc(Comment.created_at))
        return list(db.scalars(stmt).all())

    def get_page(
        self,
        db: Session,
        *,
        status: Optional[str] = None,
        search: Optional[str] = None,
        skip: int = 0,
        limit: int = 20
    ) -> List[Comment]:
        stmt = (
            _apply_filters(select(Comment), status=status, search=search)
            .order_by(desc(Comment.created_at))
            .offset(skip)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())

    def count_filtered(
        self,
        db: Session,
        *,
        status: Optional[str] = None,
        search: Optional[str] = None
    ) -> int:
        stmt = _apply_filters(select(func.count(Comment.id)), status=status, search=search)
        return db.scalar(stmt) or 0

    def count_approved_by_post(self, db: Session, *, post_ids: Iterable[str]) -> Dict[str, int]:
        """Approved comment count per post, in one grouped query."""
        ids = list(post_ids)
        if not ids:
            return {}
        stmt = (
            select(Comment.post_id, func.count(Comment.id))
            .where(Comment.post_id.in_(ids), Comment.status == CommentStatus.APPROVED.value)
            .group_by(Comment.post_id)
        )
        return {post_id: count for post_id, count in db.execute(stmt).all()}

    def set_status_for_ids(self, db: Session, *, ids: List[str], status: str) -> int:
        """Set ``status`` on every listed comment and commit."""
        stmt = (
            update(Comment)
            .where(Comment.id.in_(ids))
            .values(status=status, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount

    def delete_ids(self, db: Session, *, ids: List[str]) -> int:
        """Hard-delete every listed comment and commit."""
        stmt = delete(Comment).where(Comment.id.in_(ids)).execution_options(synchronize_session=False)
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount


# Singleton instance
crud_comment = CRUDComment(Comment)
