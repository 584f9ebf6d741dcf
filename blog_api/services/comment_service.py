"""Service layer for comments and comment moderation."""

import logging
import math
from typing import Callable, List, Optional

from sqlalchemy.orm import Session

from blog_api.core.exceptions import (
    BulkOperationError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)
from blog_api.crud.comment import crud_comment
from blog_api.crud.post import crud_post
from blog_api.models.comment import Comment, CommentStatus
from blog_api.schemas.comment import (
    CommentAdminListResponse,
    CommentCreate,
    CommentPostInfo,
    CommentResponse,
    CommentUpdate,
)

logger = logging.getLogger(__name__)


class CommentService:
    """
    Service for reading, writing and moderating comments.

    New comments always start as ``pending``; only approved comments are
    counted on posts. Bulk actions run in fixed-size chunks, each chunk
    committed on its own.
    """

    BULK_CHUNK_SIZE = 100
    BULK_ACTIONS = ("approve", "delete")

    # ----- helpers -----
    def _to_responses(self, db: Session, comments: List[Comment]) -> List[CommentResponse]:
        """Attach ``{id, title, slug}`` of the owning post to each comment."""
        posts = crud_post.get_titles(db, post_ids={c.post_id for c in comments})
        post_info = {p.id: CommentPostInfo.model_validate(p) for p in posts}
        return [
            CommentResponse.model_validate(c).model_copy(update={"post": post_info.get(c.post_id)})
            for c in comments
        ]

    def _get_or_404(self, db: Session, comment_id: str) -> Comment:
        comment = crud_comment.get(db, comment_id)
        if not comment:
            raise NotFoundError(f"Comment with ID {comment_id} not found")
        return comment

    # ----- create / read -----
    def create(self, db: Session, *, comment_in: CommentCreate) -> CommentResponse:
        """
        Create a comment in ``pending`` state.

        Args:
            db: Database session
            comment_in: Comment payload; any status supplied by the client is ignored

        Raises:
            NotFoundError: If the post does not exist
            InvalidInputError: If the parent comment does not exist or belongs to another post
        """
        if not crud_post.get(db, comment_in.post_id):
            raise NotFoundError(f"Post with ID {comment_in.post_id} not found")

        if comment_in.parent_id:
            parent = crud_comment.get(db, comment_in.parent_id)
            if not parent:
                raise InvalidInputError(f"Parent comment with ID {comment_in.parent_id} not found")
            if parent.post_id != comment_in.post_id:
                raise InvalidInputError("Parent comment does not belong to the same post")

        data = comment_in.model_dump()
        data["status"] = CommentStatus.PENDING.value
        try:
            comment = crud_comment.create(db, obj_in=data)
        except Exception as e:
            logger.error(f"Failed to create comment on post {comment_in.post_id}: {e}")
            raise ServiceError(f"Failed to create comment: {e}") from e

        logger.info(f"Comment {comment.id} created on post {comment.post_id} (pending)")
        return self._to_responses(db, [comment])[0]

    def find_all(
        self,
        db: Session,
        *,
        post_id: Optional[str] = None,
        status: Optional[str] = None,
        parent_id: Optional[str] = None,
        top_level_only: bool = False,
        search: Optional[str] = None,
    ) -> List[CommentResponse]:
        """
        List comments newest first.

        Args:
            post_id: Only comments of this post
            status: Only this status; ``"all"`` or None disables the filter
            parent_id: Only replies to this comment
            top_level_only: Only comments without a parent
            search: Case-insensitive match on content, author name or author email
        """
        try:
            comments = crud_comment.get_filtered(
                db,
                post_id=post_id,
                status=status,
                parent_id=parent_id,
                top_level_only=top_level_only,
                search=search,
            )
            return self._to_responses(db, comments)
        except Exception as e:
            logger.error(f"Failed to fetch comments: {e}")
            raise ServiceError(f"Failed to fetch comments: {e}") from e

    def find_all_for_admin(
        self,
        db: Session,
        *,
        status: Optional[str] = None,
        search: Optional[str] = None,
        page: int = 1,
        limit: int = 20,
    ) -> CommentAdminListResponse:
        """Paginated comment list for moderation."""
        page = max(page, 1)
        limit = max(limit, 1)
        try:
            total = crud_comment.count_filtered(db, status=status, search=search)
            comments = crud_comment.get_page(
                db,
                status=status,
                search=search,
                skip=(page - 1) * limit,
                limit=limit,
            )
            data = self._to_responses(db, comments)
        except Exception as e:
            logger.error(f"Failed to fetch comments for moderation: {e}")
            raise ServiceError(f"Failed to fetch comments: {e}") from e

        return CommentAdminListResponse(
            data=data,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit) if total else 0,
        )

    def find_one(self, db: Session, *, comment_id: str) -> CommentResponse:
        comment = self._get_or_404(db, comment_id)
        return self._to_responses(db, [comment])[0]

    def count_approved(self, db: Session, *, post_id: str) -> int:
        """Number of approved comments on a post."""
        return crud_comment.count_approved_by_post(db, post_ids=[post_id]).get(post_id, 0)

    # ----- update / delete -----
    def update(self, db: Session, *, comment_id: str, comment_in: CommentUpdate) -> CommentResponse:
        comment = self._get_or_404(db, comment_id)
        try:
            comment = crud_comment.update(db, db_obj=comment, obj_in=comment_in)
        except Exception as e:
            logger.error(f"Failed to update comment {comment_id}: {e}")
            raise ServiceError(f"Failed to update comment: {e}") from e
        return self._to_responses(db, [comment])[0]

    def set_approval(self, db: Session, *, comment_id: str, is_approved: bool) -> CommentResponse:
        """Approve a comment, or send it back to ``pending``."""
        new_status = CommentStatus.APPROVED if is_approved else CommentStatus.PENDING
        return self.update(
            db,
            comment_id=comment_id,
            comment_in=CommentUpdate(status=new_status.value),
        )

    def remove(self, db: Session, *, comment_id: str) -> None:
        self._get_or_404(db, comment_id)
        try:
            crud_comment.delete(db, id=comment_id)
        except Exception as e:
            logger.error(f"Failed to delete comment {comment_id}: {e}")
            raise ServiceError(f"Failed to delete comment: {e}") from e
        logger.info(f"Comment {comment_id} deleted")

    # ----- bulk moderation -----
    def _apply_in_chunks(
        self,
        comment_ids: List[str],
        operation: Callable[[List[str]], object],
        action: str,
    ) -> int:
        """
        Run ``operation`` over ``comment_ids`` in chunks of ``BULK_CHUNK_SIZE``.

        Chunks are applied in order and each one commits on its own, so a
        failure leaves earlier chunks in place.

        Returns:
            Number of ids processed

        Raises:
            BulkOperationError: Carrying the committed and the unapplied ids
        """
        applied: List[str] = []
        for start in range(0, len(comment_ids), self.BULK_CHUNK_SIZE):
            chunk = comment_ids[start:start + self.BULK_CHUNK_SIZE]
            try:
                operation(chunk)
            except Exception as e:
                logger.error(
                    f"Bulk {action} failed at chunk starting {start}: "
                    f"{len(applied)} applied, {len(comment_ids) - start} not applied: {e}"
                )
                raise BulkOperationError(
                    f"Failed to {action} comments: {e}",
                    succeeded=applied,
                    failed=comment_ids[start:],
                ) from e
            applied.extend(chunk)

        logger.info(f"Bulk {action} processed {len(applied)} comments")
        return len(applied)

    def bulk_approve(self, db: Session, *, comment_ids: List[str]) -> int:
        return self._apply_in_chunks(
            comment_ids,
            lambda chunk: crud_comment.set_status_for_ids(
                db, ids=chunk, status=CommentStatus.APPROVED.value
            ),
            "approve",
        )

    def bulk_delete(self, db: Session, *, comment_ids: List[str]) -> int:
        return self._apply_in_chunks(
            comment_ids,
            lambda chunk: crud_comment.delete_ids(db, ids=chunk),
            "delete",
        )

    def bulk_action(self, db: Session, *, comment_ids: List[str], action: str) -> int:
        """
        Apply a moderation action to many comments.

        Raises:
            InvalidInputError: If ``comment_ids`` is empty or ``action`` is unknown
            BulkOperationError: If a chunk fails part way through
        """
        if not comment_ids:
            raise InvalidInputError("Comment IDs are required")
        if action not in self.BULK_ACTIONS:
            raise InvalidInputError(f"Invalid action '{action}'. Use 'approve' or 'delete'")
        if action == "approve":
            return self.bulk_approve(db, comment_ids=comment_ids)
        return self.bulk_delete(db, comment_ids=comment_ids)


# Singleton instance
comment_service = CommentService()
