"""Category endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.deps import get_admin_db, get_current_active_user, get_db
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from blog_api.services.category_service import category_service

router = APIRouter(
    prefix="/categories",
    tags=["Categories"],
)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create category",
)
def create_category(
    category_in: CategoryCreate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> CategoryResponse:
    """The slug is the lowercased name with whitespace replaced by hyphens."""
    try:
        return CategoryResponse.model_validate(
            category_service.create(db, category_in=category_in)
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to create category")


@router.get("", response_model=List[CategoryResponse], summary="List categories")
def list_categories(db: Session = Depends(get_db)) -> List[CategoryResponse]:
    try:
        return [CategoryResponse.model_validate(c) for c in category_service.find_all(db)]
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch categories")


@router.get("/{category_id}", response_model=CategoryResponse, summary="Get category")
def get_category(category_id: str, db: Session = Depends(get_db)) -> CategoryResponse:
    try:
        return CategoryResponse.model_validate(
            category_service.find_one(db, category_id=category_id)
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch category")


@router.put("/{category_id}", response_model=CategoryResponse, summary="Update category")
def update_category(
    category_id: str,
    category_in: CategoryUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> CategoryResponse:
    try:
        return CategoryResponse.model_validate(
            category_service.update(db, category_id=category_id, category_in=category_in)
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to update category")


@router.delete("/{category_id}", status_code=status.HTTP_200_OK, summary="Delete category")
def delete_category(
    category_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> dict:
    try:
        category_service.remove(db, category_id=category_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete category")
    return {"message": "Category deleted successfully"}
