"""CRUD operations for post/category join rows."""

from collections import defaultdict
from typing import Dict, Iterable, List

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.category import Category
from blog_api.models.post_category import PostCategory


class CRUDPostCategory(CRUDBase[PostCategory, dict, dict]):
    """CRUD operations for PostCategory."""

    def get_post_ids_for_category(self, db: Session, *, category_id: str) -> List[str]:
        stmt = select(PostCategory.post_id).where(PostCategory.category_id == category_id)
        return list(db.scalars(stmt).all())

    def get_categories_by_post(
        self,
        db: Session,
        *,
        post_ids: Iterable[str]
    ) -> Dict[str, List[Category]]:
        """Map post id -> categories, ordered by category name."""
        ids = list(post_ids)
        result: Dict[str, List[Category]] = defaultdict(list)
        if not ids:
            return result
        stmt = (
            select(PostCategory.post_id, Category)
            .join(Category, Category.id == PostCategory.category_id)
            .where(PostCategory.post_id.in_(ids))
            .order_by(Category.name)
        )
        for post_id, category in db.execute(stmt).all():
            result[post_id].append(category)
        return result

    def delete_for_post(self, db: Session, *, post_id: str) -> int:
        try:
            result = db.execute(delete(PostCategory).where(PostCategory.post_id == post_id))
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount

    def replace_for_post(self, db: Session, *, post_id: str, category_ids: Iterable[str]) -> None:
        """Delete every association of the post, then insert one row per category id."""
        try:
            db.execute(delete(PostCategory).where(PostCategory.post_id == post_id))
            for category_id in dict.fromkeys(category_ids):
                db.add(PostCategory(post_id=post_id, category_id=category_id))
            db.commit()
        except Exception:
            db.rollback()
            raise


# Singleton instance
crud_post_category = CRUDPostCategory(PostCategory)
