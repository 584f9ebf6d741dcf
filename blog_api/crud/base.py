"""Generic CRUD base class for SQLAlchemy models."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Generic, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from blog_api.database import Base


ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class CRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
	"""Reusable CRUD helper for SQLAlchemy models.

	All methods operate on model instances and return database objects, not schemas.
	Writes stamp ``created_at``/``updated_at`` when the model has them.
	"""

	def __init__(self, model: Type[ModelType]):
		self.model = model

	# ----- Read -----
	def get(self, db: Session, id: Any) -> Optional[ModelType]:
		"""Get one record by primary key."""
		return db.get(self.model, id)

	def get_multi(self, db: Session, *, skip: int = 0, limit: int = 100) -> List[ModelType]:
		"""Get records with pagination."""
		stmt = select(self.model).offset(skip).limit(limit)
		return list(db.scalars(stmt).all())

	def get_by_field(self, db: Session, field_name: str, value: Any) -> Optional[ModelType]:
		"""Get first record where given field equals value."""
		if not hasattr(self.model, field_name):
			raise AttributeError(f"Model '{self.model.__name__}' has no field '{field_name}'")
		stmt = select(self.model).where(getattr(self.model, field_name) == value).limit(1)
		return db.scalars(stmt).first()

	def query(self, db: Session, filters: Optional[Mapping[str, Any]] = None) -> List[ModelType]:
		"""Get records matching equality filters; list values become IN filters, None values are skipped."""
		stmt = select(self.model)
		for field_name, value in (filters or {}).items():
			if value is None:
				continue
			column = getattr(self.model, field_name)
			if isinstance(value, (list, tuple, set)):
				stmt = stmt.where(column.in_(list(value)))
			else:
				stmt = stmt.where(column == value)
		return list(db.scalars(stmt).all())

	def count(self, db: Session) -> int:
		"""Count all records."""
		return db.scalar(select(func.count()).select_from(self.model)) or 0

	# ----- Create -----
	def create(self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]]) -> ModelType:
		"""Create a new record from a Pydantic schema or dict."""
		obj_in_data: Dict[str, Any] = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)
		now = datetime.utcnow()
		if hasattr(self.model, "created_at"):
			obj_in_data.setdefault("created_at", now)
		if hasattr(self.model, "updated_at"):
			obj_in_data.setdefault("updated_at", now)
		db_obj = self.model(**obj_in_data)  # type: ignore[arg-type]
		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	# ----- Update -----
	def update(
		self,
		db: Session,
		*,
		db_obj: ModelType,
		obj_in: Union[UpdateSchemaType, Dict[str, Any]],
	) -> ModelType:
		"""Update a record with fields from a Pydantic schema or dict."""
		update_data = obj_in.model_dump(exclude_unset=True) if isinstance(obj_in, BaseModel) else dict(obj_in)

		for field, value in update_data.items():
			if hasattr(db_obj, field):
				setattr(db_obj, field, value)
		if hasattr(db_obj, "updated_at"):
			db_obj.updated_at = datetime.utcnow()

		try:
			db.add(db_obj)
			db.commit()
			db.refresh(db_obj)
		except Exception:
			db.rollback()
			raise
		return db_obj

	# ----- Delete -----
	def delete(self, db: Session, *, id: Any) -> Optional[ModelType]:
		"""Hard-delete a record.

		Returns the deleted object (or None if not found).
		"""
		db_obj = self.get(db, id)
		if not db_obj:
			return None

		try:
			db.delete(db_obj)
			db.commit()
		except Exception:
			db.rollback()
			raise
		return db_obj
