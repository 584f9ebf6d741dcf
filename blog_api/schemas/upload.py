"""Pydantic schemas for uploads."""

from pydantic import BaseModel


class UploadResponse(BaseModel):
    url: str
    path: str


class FeaturedImageResponse(UploadResponse):
    post_id: str
