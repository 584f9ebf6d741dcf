"""User management endpoints (admin only)."""

from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_api.api.deps import get_db, require_role
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.user import UserCreate, UserResponse, UserUpdate
from blog_api.services.user_service import user_service

router = APIRouter(
    prefix="/users",
    tags=["Users"],
)


@router.post(
    "",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
)
def create_user(
    user_in: UserCreate,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> UserResponse:
    """
    Create a user with any role.

    **Access:** Admin only
    """
    try:
        return UserResponse.model_validate(user_service.create(db, user_in=user_in))
    except Exception as e:
        raise to_http_exception(e, "Failed to create user")


@router.get(
    "",
    response_model=List[UserResponse],
    summary="List users",
)
def list_users(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> List[UserResponse]:
    users = user_service.find_all(db, skip=skip, limit=limit)
    return [UserResponse.model_validate(u) for u in users]


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
)
def get_user(
    user_id: str,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> UserResponse:
    try:
        return UserResponse.model_validate(user_service.find_one(db, user_id=user_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch user")


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update user",
)
def update_user(
    user_id: str,
    user_in: UserUpdate,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> UserResponse:
    """Update a user. A changed email is re-checked for duplicates, a new password is re-hashed."""
    try:
        return UserResponse.model_validate(
            user_service.update(db, user_id=user_id, user_in=user_in)
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to update user")


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete user",
)
def delete_user(
    user_id: str,
    current_user: User = Depends(require_role("admin")),
    db: Session = Depends(get_db),
) -> dict:
    try:
        user_service.remove(db, user_id=user_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete user")
    return {"message": "User deleted successfully"}
