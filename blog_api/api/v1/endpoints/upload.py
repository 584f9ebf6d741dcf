"""Upload endpoints for images"""
import logging

from fastapi import APIRouter, Depends, File, Request, UploadFile, status
from sqlalchemy.orm import Session

from blog_api.api.deps import get_admin_db, get_current_active_user, require_role
from blog_api.core.exceptions import to_http_exception
from blog_api.models.user import User
from blog_api.schemas.post import PostUpdate
from blog_api.schemas.upload import FeaturedImageResponse, UploadResponse
from blog_api.services.post_service import post_service
from blog_api.utils.file_handler import delete_file, get_file_url, save_upload_file

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/upload",
    tags=["Upload"]
)


@router.post(
    "",
    response_model=UploadResponse,
    status_code=status.HTTP_201_CREATED,
)
def upload_image(
    request: Request,
    file: UploadFile = File(...),
    current_user: User = Depends(get_current_active_user),
) -> UploadResponse:
    """
    Upload an image (JPEG, PNG, GIF or WebP, max 5MB).

    Returns the absolute `url` and the public `path` (/uploads/<name>).
    """
    file_path = save_upload_file(file)
    return UploadResponse(url=get_file_url(str(request.base_url), file_path), path=file_path)


@router.put(
    "/posts/{post_id}/featured-image",
    response_model=FeaturedImageResponse,
)
def update_featured_image(
    post_id: str,
    request: Request,
    file: UploadFile = File(...),
    current_user: User = Depends(require_role("author", "admin")),
    db: Session = Depends(get_admin_db),
) -> FeaturedImageResponse:
    """
    Replace the featured image of a post.

    The old file is deleted once the post points at the new one.
    """
    try:
        old_image = post_service.find_one(db, post_id=post_id).featured_image
    except Exception as e:
        raise to_http_exception(e, "Failed to fetch post")

    file_path = save_upload_file(file)
    file_url = get_file_url(str(request.base_url), file_path)

    try:
        post_service.update(db, post_id=post_id, post_in=PostUpdate(featured_image=file_url))
    except Exception as e:
        delete_file(file_path)
        raise to_http_exception(e, "Failed to update featured image")

    if old_image:
        delete_file(old_image)

    logger.info(f"Featured image of post {post_id} replaced by {file_path}")
    return FeaturedImageResponse(url=file_url, path=file_path, post_id=post_id)
