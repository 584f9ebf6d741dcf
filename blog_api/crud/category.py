"""CRUD operations for Category."""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.category import Category
from blog_api.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""

    def get_all_ordered(self, db: Session) -> List[Category]:
        """Get all categories ordered by name."""
        stmt = select(Category).order_by(Category.name)
        return list(db.scalars(stmt).all())


# Singleton instance
crud_category = CRUDCategory(Category)
