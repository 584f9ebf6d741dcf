"""Core module exports."""

from .exceptions import (
    BulkOperationError,
    ConflictError,
    InvalidInputError,
    NotFoundError,
    ServiceError,
)
from .security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
    ALGORITHM,
)

__all__ = [
    "BulkOperationError",
    "ConflictError",
    "InvalidInputError",
    "NotFoundError",
    "ServiceError",
    "create_access_token",
    "decode_token",
    "get_password_hash",
    "verify_password",
    "ALGORITHM",
]
