"""Pydantic schemas for Tag."""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator


class TagCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=50, description="Tag name")


class TagUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=50)

    @field_validator("name")
    @classmethod
    def reject_null_name(cls, v):
        if v is None:
            raise ValueError("Name cannot be null")
        return v


class TagResponse(BaseModel):
    id: str
    name: str
    slug: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
