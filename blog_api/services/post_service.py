"""Service layer for blog posts."""

import logging
from datetime import datetime
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from blog_api.core.exceptions import ConflictError, InvalidInputError, NotFoundError, ServiceError
from blog_api.crud.category import crud_category
from blog_api.crud.comment import crud_comment
from blog_api.crud.post import crud_post
from blog_api.crud.post_category import crud_post_category
from blog_api.crud.user import crud_user
from blog_api.models.comment import CommentStatus
from blog_api.models.post import Post, PostStatus
from blog_api.schemas.category import CategoryResponse
from blog_api.schemas.post import PostCreate, PostDetailResponse, PostResponse, PostUpdate
from blog_api.services.comment_service import comment_service
from blog_api.utils.slugify import generate_unique_slug

logger = logging.getLogger(__name__)


class PostService:
    """
    Service for creating, reading, updating and removing posts.

    Every post read recomputes ``comments_count`` from approved comments and
    attaches the post's categories. Slugs are derived from titles and kept
    unique across all posts.
    """

    # ----- helpers -----
    def _unique_slug(self, db: Session, title: str, exclude_id: Optional[str] = None) -> str:
        return generate_unique_slug(
            title,
            lambda candidate: crud_post.slug_exists(db, slug=candidate, exclude_id=exclude_id),
        )

    def _get_or_404(self, db: Session, post_id: str) -> Post:
        post = crud_post.get(db, post_id)
        if not post:
            raise NotFoundError(f"Post with ID {post_id} not found")
        return post

    def _set_categories(self, db: Session, post_id: str, category_ids: List[str]) -> None:
        """Replace every category association of a post. Unknown category ids are skipped."""
        valid_ids = []
        for category_id in category_ids:
            if crud_category.get(db, category_id):
                valid_ids.append(category_id)
            else:
                logger.warning(f"Skipping unknown category {category_id} for post {post_id}")
        try:
            crud_post_category.replace_for_post(db, post_id=post_id, category_ids=valid_ids)
        except Exception as e:
            logger.error(f"Failed to update categories of post {post_id}: {e}")
            raise ServiceError(f"Failed to update post categories: {e}") from e

    def _to_responses(self, db: Session, posts: List[Post]) -> List[PostResponse]:
        """Build list responses with categories and approved comment counts in two queries."""
        post_ids = [p.id for p in posts]
        categories = crud_post_category.get_categories_by_post(db, post_ids=post_ids)
        counts: Dict[str, int] = crud_comment.count_approved_by_post(db, post_ids=post_ids)
        return [
            PostResponse.model_validate(p).model_copy(
                update={
                    "categories": [CategoryResponse.model_validate(c) for c in categories.get(p.id, [])],
                    "comments_count": counts.get(p.id, 0),
                }
            )
            for p in posts
        ]

    def _to_detail(self, db: Session, post: Post) -> PostDetailResponse:
        comments = comment_service.find_all(
            db, post_id=post.id, status=CommentStatus.APPROVED.value
        )
        categories = crud_post_category.get_categories_by_post(db, post_ids=[post.id])
        return PostDetailResponse.model_validate(post).model_copy(
            update={
                "categories": [CategoryResponse.model_validate(c) for c in categories.get(post.id, [])],
                "comments": comments,
                "comments_count": len(comments),
            }
        )

    # ----- create -----
    def create(self, db: Session, *, post_in: PostCreate, author_id: str) -> PostDetailResponse:
        """
        Create a post owned by ``author_id``.

        The slug is generated from the title. ``published_at`` is only kept
        when the initial status is ``published`` (defaulting to now).

        Raises:
            NotFoundError: If the author does not exist
            ConflictError: If a concurrent writer took the same slug
        """
        if not crud_user.get(db, author_id):
            raise NotFoundError(f"User with ID {author_id} not found")

        slug = self._unique_slug(db, post_in.title)
        data = post_in.model_dump(exclude={"categories"})
        data.update(
            slug=slug,
            author_id=author_id,
            view_count=0,
            comments_count=0,
        )
        if post_in.status == PostStatus.PUBLISHED.value:
            data["published_at"] = post_in.published_at or datetime.utcnow()
        else:
            data["published_at"] = None

        try:
            post = crud_post.create(db, obj_in=data)
        except IntegrityError as e:
            logger.warning(f"Slug collision on create for '{slug}': {e}")
            raise ConflictError(f"Post with slug '{slug}' already exists") from e
        except Exception as e:
            logger.error(f"Failed to create post: {e}")
            raise ServiceError(f"Failed to create post: {e}") from e

        if post_in.categories:
            self._set_categories(db, post.id, post_in.categories)

        logger.info(f"Post {post.id} created with slug '{slug}' by {author_id}")
        return self._to_detail(db, post)

    # ----- read -----
    def find_all(
        self,
        db: Session,
        *,
        status: Optional[str] = None,
        author_id: Optional[str] = None,
        category_id: Optional[str] = None,
    ) -> List[PostResponse]:
        """
        List posts newest first.

        Args:
            status: Only posts with this status
            author_id: Only posts by this author
            category_id: Only posts linked to this category
        """
        try:
            post_ids = None
            if category_id:
                post_ids = crud_post_category.get_post_ids_for_category(db, category_id=category_id)
                if not post_ids:
                    return []
            posts = crud_post.get_filtered(db, status=status, author_id=author_id, post_ids=post_ids)
            return self._to_responses(db, posts)
        except Exception as e:
            logger.error(f"Failed to fetch posts: {e}")
            raise ServiceError(f"Failed to fetch posts: {e}") from e

    def find_one(self, db: Session, *, post_id: str) -> PostDetailResponse:
        """Get a post with its categories and approved comments."""
        return self._to_detail(db, self._get_or_404(db, post_id))

    def find_by_slug(self, db: Session, *, slug: str) -> PostDetailResponse:
        post = crud_post.get_by_slug(db, slug=slug)
        if not post:
            raise NotFoundError(f"Post with slug '{slug}' not found")
        return self._to_detail(db, post)

    # ----- update -----
    def update(self, db: Session, *, post_id: str, post_in: PostUpdate) -> PostDetailResponse:
        """
        Update a post.

        A changed title regenerates the slug, excluding the post itself from
        the uniqueness check. Switching to ``published`` without a
        ``published_at`` stamps the current time. A supplied category list
        fully replaces the previous associations.
        """
        post = self._get_or_404(db, post_id)

        if post_in.increment_views:
            self.increment_views(db, post_id=post_id)
            db.refresh(post)

        data = post_in.model_dump(exclude_unset=True, exclude={"categories", "increment_views"})
        if data.get("title") and data["title"] != post.title:
            data["slug"] = self._unique_slug(db, data["title"], exclude_id=post_id)
        if data.get("status") == PostStatus.PUBLISHED.value and not data.get("published_at"):
            data["published_at"] = datetime.utcnow()

        if data:
            try:
                post = crud_post.update(db, db_obj=post, obj_in=data)
            except IntegrityError as e:
                if "slug" in data:
                    logger.warning(f"Slug collision on update of post {post_id}: {e}")
                    raise ConflictError(f"Post with slug '{data['slug']}' already exists") from e
                logger.error(f"Integrity error on update of post {post_id}: {e}")
                raise InvalidInputError(f"Invalid post update: {e.orig}") from e
            except Exception as e:
                logger.error(f"Failed to update post {post_id}: {e}")
                raise ServiceError(f"Failed to update post: {e}") from e

        if post_in.categories is not None:
            self._set_categories(db, post_id, post_in.categories)

        return self._to_detail(db, post)

    def publish(self, db: Session, *, post_id: str) -> PostDetailResponse:
        return self.update(db, post_id=post_id, post_in=PostUpdate(status=PostStatus.PUBLISHED.value))

    def archive(self, db: Session, *, post_id: str) -> PostDetailResponse:
        return self.update(db, post_id=post_id, post_in=PostUpdate(status=PostStatus.ARCHIVED.value))

    def increment_views(self, db: Session, *, post_id: str) -> None:
        """Add one to the view counter with a single UPDATE."""
        try:
            touched = crud_post.increment_views(db, post_id=post_id)
        except Exception as e:
            logger.error(f"Failed to increment views of post {post_id}: {e}")
            raise ServiceError(f"Failed to increment views: {e}") from e
        if not touched:
            raise NotFoundError(f"Post with ID {post_id} not found")

    # ----- delete -----
    def remove(self, db: Session, *, post_id: str) -> None:
        """
        Delete a post and its category associations.

        Comments are not touched here; the database foreign key decides
        what happens to them.
        """
        self._get_or_404(db, post_id)
        try:
            crud_post_category.delete_for_post(db, post_id=post_id)
            crud_post.delete(db, id=post_id)
        except Exception as e:
            logger.error(f"Failed to delete post {post_id}: {e}")
            raise ServiceError(f"Failed to delete post: {e}") from e
        logger.info(f"Post {post_id} deleted")


# Singleton instance
post_service = PostService()
