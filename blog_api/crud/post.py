"""CRUD operations for Post."""

from typing import Iterable, List, Optional

from sqlalchemy import desc, select, update
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.post import Post
from blog_api.schemas.post import PostCreate, PostUpdate


class CRUDPost(CRUDBase[Post, PostCreate, PostUpdate]):
    """CRUD operations for Post."""

    def slug_exists(
        self,
        db: Session,
        *,
        slug: str,
        exclude_id: Optional[str] = None
    ) -> bool:
        """Check whether another post already uses ``slug``."""
        stmt = select(Post.id).where(Post.slug == slug)
        if exclude_id:
            stmt = stmt.where(Post.id != exclude_id)
        return db.scalars(stmt.limit(1)).first() is not None

    def get_by_slug(self, db: Session, *, slug: str) -> Optional[Post]:
        return self.get_by_field(db, "slug", slug)

    def get_filtered(
        self,
        db: Session,
        *,
        status: Optional[str] = None,
        author_id: Optional[str] = None,
        post_ids: Optional[Iterable[str]] = None
    ) -> List[Post]:
        """Get posts newest first, optionally filtered by status, author and id set."""
        stmt = select(Post)
        if status is not None:
            stmt = stmt.where(Post.status == status)
        if author_id:
            stmt = stmt.where(Post.author_id == author_id)
        if post_ids is not None:
            stmt = stmt.where(Post.id.in_(list(post_ids)))
        stmt = stmt.order_by(desc(Post.created_at))
        return list(db.scalars(stmt).unique().all())

    def get_titles(self, db: Session, *, post_ids: Iterable[str]) -> List[Post]:
        """Load posts for title enrichment."""
        ids = list(post_ids)
        if not ids:
            return []
        return self.query(db, {"id": ids})

    def increment_views(self, db: Session, *, post_id: str) -> int:
        """Atomically add one to ``view_count``. Returns the number of rows touched."""
        stmt = (
            update(Post)
            .where(Post.id == post_id)
            .values(view_count=Post.view_count + 1)
            .execution_options(synchronize_session=False)
        )
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount


# Singleton instance
crud_post = CRUDPost(Post)
