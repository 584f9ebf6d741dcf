"""Blog post endpoints."""

import logging
from typing import List, Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Query, status
from sqlalchemy.orm import Session, sessionmaker

from blog_api.api.deps import (
    get_admin_db,
    get_current_active_user,
    get_db,
    get_session_factory,
    require_role,
)
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.post import (
    PostCreate,
    PostDetailResponse,
    PostResponse,
    PostStatusLiteral,
    PostUpdate,
)
from blog_api.services.post_service import post_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/posts",
    tags=["Posts"],
)


def record_view(session_factory: sessionmaker, post_id: str) -> None:
    """Background view increment on its own session. Failures are only logged."""
    db = session_factory()
    try:
        post_service.increment_views(db, post_id=post_id)
    except Exception as e:
        logger.warning(f"Could not record view for post {post_id}: {e}")
    finally:
        db.close()


@router.post(
    "",
    response_model=PostDetailResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create new post",
    description="""
    Create a blog post owned by the current user.

    The slug is generated from the title and made unique by appending `-1`, `-2`, ...

    **Access:** Author and Admin only
    """,
)
def create_post(
    post_in: PostCreate,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_admin_db),
) -> PostDetailResponse:
    try:
        return post_service.create(db, post_in=post_in, author_id=current_user.id)
    except Exception as e:
        raise to_http_exception(e, "Failed to create post")


@router.get(
    "",
    response_model=List[PostResponse],
    summary="List posts",
    description="""
    List posts newest first with categories and approved comment counts.

    **Filters:** `status`, `author_id`, `category_id`
    """,
)
def list_posts(
    status_filter: Optional[PostStatusLiteral] = Query(None, alias="status"),
    author_id: Optional[str] = Query(None),
    category_id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
) -> List[PostResponse]:
    try:
        return post_service.find_all(
            db,
            status=status_filter,
            author_id=author_id,
            category_id=category_id,
        )
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch posts")


@router.get(
    "/slug/{slug}",
    response_model=PostDetailResponse,
    summary="Get post by slug",
    description="Get a post by slug. The view counter is incremented after the response is sent.",
)
def get_post_by_slug(
    slug: str,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
) -> PostDetailResponse:
    try:
        post = post_service.find_by_slug(db, slug=slug)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch post")

    background_tasks.add_task(record_view, session_factory, post.id)
    return post


@router.get(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Get post",
)
def get_post(
    post_id: str,
    db: Session = Depends(get_db),
) -> PostDetailResponse:
    try:
        return post_service.find_one(db, post_id=post_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch post")


@router.put(
    "/{post_id}",
    response_model=PostDetailResponse,
    summary="Update post",
    description="""
    Update a post. A new title regenerates the slug; `categories` replaces all
    existing associations; `increment_views: true` records a view.

    **Access:** Author and Admin only
    """,
)
def update_post(
    post_id: str,
    post_in: PostUpdate,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_admin_db),
) -> PostDetailResponse:
    try:
        return post_service.update(db, post_id=post_id, post_in=post_in)
    except Exception as e:
        raise to_http_exception(e, "Failed to update post")


@router.post(
    "/{post_id}/views",
    status_code=status.HTTP_200_OK,
    summary="Record a post view",
)
def increment_post_views(
    post_id: str,
    db: Session = Depends(get_db),
) -> dict:
    try:
        post_service.increment_views(db, post_id=post_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to increment views")
    return {"message": "View recorded"}


@router.post(
    "/{post_id}/publish",
    response_model=PostDetailResponse,
    summary="Publish post",
)
def publish_post(
    post_id: str,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_admin_db),
) -> PostDetailResponse:
    """Set status to ``published``, stamping ``published_at`` if it is empty."""
    try:
        return post_service.publish(db, post_id=post_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to publish post")


@router.post(
    "/{post_id}/archive",
    response_model=PostDetailResponse,
    summary="Archive post",
)
def archive_post(
    post_id: str,
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_admin_db),
) -> PostDetailResponse:
    try:
        return post_service.archive(db, post_id=post_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to archive post")


@router.delete(
    "/{post_id}",
    status_code=status.HTTP_200_OK,
    summary="Delete post",
    description="Delete a post and its category links. **Access:** Authenticated users",
)
def delete_post(
    post_id: str,
    current_user: User = Depends(get_current_active_user),
    db: Session = Depends(get_admin_db),
) -> dict:
    try:
        post_service.remove(db, post_id=post_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete post")
    return {"message": "Post deleted successfully"}
