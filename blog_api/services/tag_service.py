"""Service layer for tags."""

import logging
from typing import List

from sqlalchemy.orm import Session

from blog_api.core.exceptions import NotFoundError, ServiceError
from blog_api.crud.tag import crud_tag
from blog_api.models.tag import Tag
from blog_api.schemas.tag import TagCreate, TagUpdate
from blog_api.utils.slugify import tag_slug

logger = logging.getLogger(__name__)


class TagService:

    def _get_or_404(self, db: Session, tag_id: str) -> Tag:
        tag = crud_tag.get(db, tag_id)
        if not tag:
            raise NotFoundError(f"Tag with ID {tag_id} not found")
        return tag

    def create(self, db: Session, *, tag_in: TagCreate) -> Tag:
        try:
            return crud_tag.create(db, obj_in={"name": tag_in.name, "slug": tag_slug(tag_in.name)})
        except Exception as e:
            logger.error(f"Failed to create tag {tag_in.name}: {e}")
            raise ServiceError(f"Failed to create tag: {e}") from e

    def find_all(self, db: Session) -> List[Tag]:
        return crud_tag.get_all_ordered(db)

    def find_one(self, db: Session, *, tag_id: str) -> Tag:
        return self._get_or_404(db, tag_id)

    def update(self, db: Session, *, tag_id: str, tag_in: TagUpdate) -> Tag:
        tag = self._get_or_404(db, tag_id)
        data = tag_in.model_dump(exclude_unset=True)
        if data.get("name"):
            data["slug"] = tag_slug(data["name"])
        try:
            return crud_tag.update(db, db_obj=tag, obj_in=data)
        except Exception as e:
            logger.error(f"Failed to update tag {tag_id}: {e}")
            raise ServiceError(f"Failed to update tag: {e}") from e

    def remove(self, db: Session, *, tag_id: str) -> None:
        self._get_or_404(db, tag_id)
        try:
            crud_tag.delete(db, id=tag_id)
        except Exception as e:
            logger.error(f"Failed to delete tag {tag_id}: {e}")
            raise ServiceError(f"Failed to delete tag: {e}") from e


# Singleton instance
tag_service = TagService()
