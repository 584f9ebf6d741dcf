"""Comment endpoints, including moderation."""

from typing import List, Literal, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from blog_api.api.deps import (
    get_admin_db,
    get_current_active_user,
    get_db,
    get_optional_current_user,
    require_role,
)
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.comment import (
    CommentAdminListResponse,
    CommentApprove,
    CommentBulkAction,
    CommentBulkResponse,
    CommentCountResponse,
    CommentCreate,
    CommentResponse,
    CommentUpdate,
)
from blog_api.services.comment_service import comment_service

router = APIRouter(
    prefix="/comments",
    tags=["Comments"],
)

StatusFilter = Literal["pending", "approved", "spam", "trash", "all"]


@router.post(
    "",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create comment",
    description="""
    Submit a comment on a post. New comments are always `pending` until approved.
    A signed-in caller is recorded as `author_id` unless one is given.

    **Access:** Public
    """,
)
def create_comment(
    comment_in: CommentCreate,
    current_user: Optional[User] = Depends(get_optional_current_user),
    db: Session = Depends(get_db),
) -> CommentResponse:
    if current_user and not comment_in.author_id:
        comment_in = comment_in.model_copy(update={"author_id": current_user.id})
    try:
        return comment_service.create(db, comment_in=comment_in)
    except Exception as e:
        raise to_http_exception(e, "Failed to create comment")


@router.get(
    "",
    response_model=List[CommentResponse],
    summary="List comments",
    description="""
    **Filters:**
    - `post_id`: comments of one post
    - `status`: `pending`, `approved`, `spam`, `trash` or `all`
    - `parent_id`: replies to one comment; `null` returns top-level comments only
    - `search`: matches content, author name or author email
    """,
)
def list_comments(
    post_id: Optional[str] = Query(None),
    status_filter: Optional[StatusFilter] = Query(None, alias="status"),
    parent_id: Optional[str] = Query(None),
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> List[CommentResponse]:
    top_level_only = parent_id == "null"
    try:
        return comment_service.find_all(
            db,
            post_id=post_id,
            status=status_filter,
            parent_id=None if top_level_only else parent_id,
            top_level_only=top_level_only,
            search=search,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch comments")


@router.get(
    "/admin",
    response_model=CommentAdminListResponse,
    summary="List comments for moderation",
)
def list_comments_for_admin(
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    status_filter: Optional[StatusFilter] = Query(None, alias="status"),
    search: Optional[str] = Query(None),
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> CommentAdminListResponse:
    try:
        return comment_service.find_all_for_admin(
            db,
            status=status_filter,
            search=search,
            page=page,
            limit=limit,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch comments")


@router.patch(
    "/bulk",
    response_model=CommentBulkResponse,
    summary="Bulk moderate comments",
    description="""
    Apply `approve` or `delete` to many comments. Ids are processed in chunks of 100,
    each committed on its own. On failure the 500 body lists `succeeded` and `failed` ids.
    """,
)
def bulk_moderate_comments(
    bulk_in: CommentBulkAction,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> CommentBulkResponse:
    try:
        processed = comment_service.bulk_action(
            db, comment_ids=bulk_in.comment_ids, action=bulk_in.action
        )
    except Exception as e:
        raise to_http_exception(e, f"Failed to {bulk_in.action} comments")

    verb = "approved" if bulk_in.action == "approve" else "deleted"
    return CommentBulkResponse(
        message=f"Successfully {verb} {processed} comments",
        processed=processed,
    )


@router.get(
    "/post/{post_id}/count",
    response_model=CommentCountResponse,
    summary="Count approved comments of a post",
)
def count_post_comments(
    post_id: str,
    db: Session = Depends(get_db),
) -> CommentCountResponse:
    try:
        return CommentCountResponse(count=comment_service.count_approved(db, post_id=post_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to count comments")


@router.get(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Get comment",
)
def get_comment(
    comment_id: str,
    db: Session = Depends(get_db),
) -> CommentResponse:
    try:
        return comment_service.find_one(db, comment_id=comment_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch comment")


@router.put(
    "/{comment_id}",
    response_model=CommentResponse,
    summary="Update comment",
)
def update_comment(
    comment_id: str,
    comment_in: CommentUpdate,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> CommentResponse:
    try:
        return comment_service.update(db, comment_id=comment_id, comment_in=comment_in)
    except Exception as e:
        raise to_http_exception(e, "Failed to update comment")


@router.patch(
    "/{comment_id}/approve",
    response_model=CommentResponse,
    summary="Approve or unapprove comment",
    description="**Access:** Admin and Editor only",
)
def approve_comment(
    comment_id: str,
    approve_in: CommentApprove,
    current_user: User = Depends(require_role("admin", "editor")),
    db: Session = Depends(get_admin_db),
) -> CommentResponse:
    try:
        return comment_service.set_approval(
            db, comment_id=comment_id, is_approved=approve_in.is_approved
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to update comment")


@router.delete(
    "/{comment_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete comment",
)
def delete_comment(
    comment_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> dict:
    try:
        comment_service.remove(db, comment_id=comment_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete comment")
    return {"message": "Comment deleted successfully"}
