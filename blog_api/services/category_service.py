"""Service layer for categories."""

import logging
from typing import List

from sqlalchemy.orm import Session

from blog_api.core.exceptions import NotFoundError, ServiceError
from blog_api.crud.category import crud_category
from blog_api.models.category import Category
from blog_api.schemas.category import CategoryCreate, CategoryUpdate
from blog_api.utils.slugify import category_slug

logger = logging.getLogger(__name__)


class CategoryService:
    """Category CRUD. The slug always follows the name."""

    def _get_or_404(self, db: Session, category_id: str) -> Category:
        category = crud_category.get(db, category_id)
        if not category:
            raise NotFoundError(f"Category with ID {category_id} not found")
        return category

    def create(self, db: Session, *, category_in: CategoryCreate) -> Category:
        data = category_in.model_dump()
        data["slug"] = category_slug(category_in.name)
        try:
            return crud_category.create(db, obj_in=data)
        except Exception as e:
            logger.error(f"Failed to create category {category_in.name}: {e}")
            raise ServiceError(f"Failed to create category: {e}") from e

    def find_all(self, db: Session) -> List[Category]:
        return crud_category.get_all_ordered(db)

    def find_one(self, db: Session, *, category_id: str) -> Category:
        return self._get_or_404(db, category_id)

    def update(self, db: Session, *, category_id: str, category_in: CategoryUpdate) -> Category:
        category = self._get_or_404(db, category_id)
        data = category_in.model_dump(exclude_unset=True)
        if data.get("name"):
            data["slug"] = category_slug(data["name"])
        try:
            return crud_category.update(db, db_obj=category, obj_in=data)
        except Exception as e:
            logger.error(f"Failed to update category {category_id}: {e}")
            raise ServiceError(f"Failed to update category: {e}") from e

    def remove(self, db: Session, *, category_id: str) -> None:
        self._get_or_404(db, category_id)
        try:
            crud_category.delete(db, id=category_id)
        except Exception as e:
            logger.error(f"Failed to delete category {category_id}: {e}")
            raise ServiceError(f"Failed to delete category: {e}") from e


# Singleton instance
category_service = CategoryService()
