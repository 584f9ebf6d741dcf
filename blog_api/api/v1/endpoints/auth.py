"""Authentication endpoints."""

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from blog_api.api.deps import get_current_active_user, get_db
from blog_api.core.exceptions import (
    AccountInactiveException,
    InvalidCredentialsException,
    to_http_exception,
)
from blog_api.core.security import create_access_token
from blog_api.models.user import User
from blog_api.schemas.user import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
    UserResponse,
)
from blog_api.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
)
def register(
    register_in: RegisterRequest,
    db: Session = Depends(get_db),
) -> RegisterResponse:
    """
    Register a new reader account.

    The role is always ``user``; elevated roles are granted by an admin.

    Raises:
        HTTPException: 409 if the email is already registered
    """
    try:
        user = user_service.register(db, register_in=register_in)
    except Exception as e:
        raise to_http_exception(e, "Failed to register user")

    return RegisterResponse(
        message="User registered successfully",
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    status_code=status.HTTP_200_OK,
    summary="Login user",
)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
) -> TokenResponse:
    """
    Login with email and password.

    Returns:
        TokenResponse: Bearer token carrying ``sub`` (user id), ``email`` and ``role``

    Raises:
        HTTPException: 401 if credentials invalid, 403 if the account is inactive
    """
    try:
        user = user_service.authenticate(db, email=credentials.email, password=credentials.password)
    except Exception as e:
        raise to_http_exception(e, "Failed to login")

    if not user:
        raise InvalidCredentialsException()
    if not user.is_active:
        raise AccountInactiveException()

    access_token = create_access_token(
        data={"sub": user.id, "email": user.email, "role": user.role},
    )
    logger.info(f"User {user.id} logged in")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        user=UserResponse.model_validate(user),
    )


@router.get(
    "/profile",
    response_model=UserResponse,
    status_code=status.HTTP_200_OK,
    summary="Get current user profile",
)
def get_profile(
    current_user: User = Depends(get_current_active_user),
) -> UserResponse:
    """Get profile of the authenticated user."""
    return UserResponse.model_validate(current_user)


@router.post(
    "/logout",
    status_code=status.HTTP_200_OK,
    summary="Logout user",
)
def logout(
    current_user: User = Depends(get_current_active_user),
) -> dict:
    """Tokens are stateless; the client discards its token."""
    return {"message": "Logged out successfully"}
