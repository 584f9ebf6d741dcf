"""Image upload handler for local disk storage"""
import logging
import uuid
from pathlib import Path
from typing import Optional, Tuple

from fastapi import HTTPException, UploadFile, status

from blog_api.config import settings

# Setup logging
logger = logging.getLogger(__name__)

# ============================================
# FILE TYPE DEFINITIONS WITH MIME VALIDATION
# ============================================

ALLOWED_MIME_TYPES = ("image/jpeg", "image/png", "image/jpg", "image/gif", "image/webp")

# Magic bytes signatures per MIME type
MAGIC_BYTES = {
    "image/jpeg": [b"\xff\xd8\xff"],
    "image/jpg": [b"\xff\xd8\xff"],
    "image/png": [b"\x89PNG\r\n\x1a\n"],
    "image/gif": [b"GIF87a", b"GIF89a"],
}

# Extension used when the client sends none
DEFAULT_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}

PUBLIC_PREFIX = "/uploads"


# ============================================
# SECURITY VALIDATION FUNCTIONS
# ============================================

def validate_magic_bytes(file_content: bytes, content_type: str) -> bool:
    """
    Check the file signature against the declared MIME type.

    WebP is a RIFF container: ``RIFF<size>WEBP``.
    """
    if content_type == "image/webp":
        return len(file_content) >= 12 and file_content[:4] == b"RIFF" and file_content[8:12] == b"WEBP"

    signatures = MAGIC_BYTES.get(content_type, [])
    return any(file_content.startswith(signature) for signature in signatures)


def get_file_extension(filename: Optional[str], content_type: str) -> str:
    """Lowercased extension of the original name, or one derived from the MIME type."""
    suffix = Path(filename or "").suffix.lower()
    if suffix and all(c.isalnum() for c in suffix[1:]):
        return suffix
    return DEFAULT_EXTENSIONS.get(content_type, "")


def validate_path_safety(file_path: str) -> bool:
    """Reject paths with traversal patterns or outside ``/uploads``."""
    if not file_path:
        return False

    for pattern in ("..", "~", "//", "\\"):
        if pattern in file_path:
            logger.warning(f"Path traversal attempt detected: {file_path}")
            return False

    if file_path.startswith("/") and not file_path.startswith(PUBLIC_PREFIX):
        return False

    return True


# ============================================
# MAIN VALIDATION FUNCTION
# ============================================

def validate_image_upload(upload_file: UploadFile) -> Tuple[bytes, str]:
    """
    Validate an uploaded image.

    Args:
        upload_file: FastAPI UploadFile object

    Returns:
        Tuple of (file_content, file_extension)

    Raises:
        HTTPException: 400 for a missing, empty or disallowed file, 413 when too large
    """
    if not upload_file or not upload_file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded"
        )

    content_type = (upload_file.content_type or "").lower()
    if content_type not in ALLOWED_MIME_TYPES:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"File type not allowed. Allowed types: {', '.join(ALLOWED_MIME_TYPES)}"
        )

    upload_file.file.seek(0)
    file_content = upload_file.file.read()
    upload_file.file.seek(0)

    if len(file_content) > settings.MAX_UPLOAD_SIZE:
        size_mb = settings.MAX_UPLOAD_SIZE / (1024 * 1024)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size: {size_mb:.1f}MB"
        )

    if len(file_content) == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty file not allowed"
        )

    if not validate_magic_bytes(file_content, content_type):
        logger.warning(
            f"Magic bytes mismatch - filename: {upload_file.filename}, "
            f"content_type: {content_type}"
        )
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="File content does not match its type"
        )

    return file_content, get_file_extension(upload_file.filename, content_type)


# ============================================
# FILE STORAGE FUNCTIONS
# ============================================

def ensure_upload_dir() -> Path:
    """Ensure upload directory exists and return the path."""
    dir_path = Path(settings.UPLOAD_DIR)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def save_upload_file(upload_file: UploadFile) -> str:
    """
    Validate and store an image under a random name.

    Returns:
        str: Public path, e.g. /uploads/3f1c...e2.png

    Raises:
        HTTPException: If validation or save fails
    """
    file_content, file_ext = validate_image_upload(upload_file)
    unique_filename = f"{uuid.uuid4()}{file_ext}"
    file_path = ensure_upload_dir() / unique_filename

    try:
        with open(file_path, "wb") as f:
            f.write(file_content)
    except OSError as e:
        logger.error(f"Failed to save file: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Error saving file"
        )

    logger.info(f"File saved: {file_path} ({len(file_content)} bytes)")
    return f"{PUBLIC_PREFIX}/{unique_filename}"


def delete_file(file_path: Optional[str]) -> bool:
    """
    Delete a previously uploaded file. Failures are logged, never raised.

    Accepts a public path (``/uploads/<name>``) or a full URL ending with one.

    Returns:
        True if file was deleted, False otherwise
    """
    if not file_path:
        return False

    marker = file_path.find(f"{PUBLIC_PREFIX}/")
    if marker == -1:
        return False
    file_path = file_path[marker:]

    if not validate_path_safety(file_path):
        logger.warning(f"Unsafe file path rejected: {file_path}")
        return False

    upload_dir = Path(settings.UPLOAD_DIR).resolve()
    resolved_path = (upload_dir / file_path[len(PUBLIC_PREFIX) + 1:]).resolve()
    if upload_dir not in resolved_path.parents:
        logger.warning(f"Path traversal blocked: {file_path} -> {resolved_path}")
        return False

    try:
        if resolved_path.is_file():
            resolved_path.unlink()
            logger.info(f"File deleted: {resolved_path}")
            return True
    except OSError as e:
        logger.error(f"Error deleting file {file_path}: {e}")
    return False


def get_file_url(base_url: str, file_path: str) -> str:
    """Absolute URL for a public upload path, e.g. http://host/uploads/x.png."""
    return f"{base_url.rstrip('/')}{file_path}"
