"""Pydantic schemas for Category."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class CategoryBase(BaseModel):
    """Base schema for Category."""
    name: str = Field(..., min_length=1, max_length=100, description="Category name")
    description: Optional[str] = Field(None, description="Category description")


class CategoryCreate(CategoryBase):
    """Schema for creating a new category."""
    pass


class CategoryUpdate(BaseModel):
    """Schema for updating a category. A new name re-derives the slug."""
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v):
        if v is None:
            raise ValueError("Name cannot be null")
        return v


class CategoryResponse(CategoryBase):
    """Schema for Category response."""
    id: str
    slug: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
