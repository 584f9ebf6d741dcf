"""CRUD operations for Tag."""

from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from blog_api.crud.base import CRUDBase
from blog_api.models.tag import Tag
from blog_api.schemas.tag import TagCreate, TagUpdate


class CRUDTag(CRUDBase[Tag, TagCreate, TagUpdate]):

    def get_all_ordered(self, db: Session) -> List[Tag]:
        stmt = select(Tag).order_by(Tag.name)
        return list(db.scalars(stmt).all())


# Singleton instance
crud_tag = CRUDTag(Tag)
