"""Tag endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.deps import get_db, require_role
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.tag import TagCreate, TagResponse, TagUpdate
from blog_api.services.tag_service import tag_service

router = APIRouter(
    prefix="/tags",
    tags=["Tags"],
)


@router.post(
    "",
    response_model=TagResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create tag",
    description="**Access:** Author and Admin only",
)
def create_tag(
    tag_in: TagCreate,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_db),
) -> TagResponse:
    try:
        return TagResponse.model_validate(tag_service.create(db, tag_in=tag_in))
    except Exception as e:
        raise to_http_exception(e, "Failed to create tag")


@router.get("", response_model=List[TagResponse], summary="List tags")
def list_tags(db: Session = Depends(get_db)) -> List[TagResponse]:
    try:
        return [TagResponse.model_validate(t) for t in tag_service.find_all(db)]
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch tags")


@router.get("/{tag_id}", response_model=TagResponse, summary="Get tag")
def get_tag(tag_id: str, db: Session = Depends(get_db)) -> TagResponse:
    try:
        return TagResponse.model_validate(tag_service.find_one(db, tag_id=tag_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch tag")


@router.put("/{tag_id}", response_model=TagResponse, summary="Update tag")
def update_tag(
    tag_id: str,
    tag_in: TagUpdate,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_db),
) -> TagResponse:
    try:
        return TagResponse.model_validate(tag_service.update(db, tag_id=tag_id, tag_in=tag_in))
    except Exception as e:
        raise to_http_exception(e, "Failed to update tag")


@router.delete("/{tag_id}", status_code=status.HTTP_200_OK, summary="Delete tag")
def delete_tag(
    tag_id: str,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_db),
) -> dict:
    try:
        tag_service.remove(db, tag_id=tag_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete tag")
    return {"message": "Tag deleted successfully"}
