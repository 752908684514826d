from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from melodyverse.api.deps import get_current_user, get_db
from melodyverse.core.config import settings
from melodyverse.db.models.user import User as UserModel
from melodyverse.schemas.user import (
    AuthResponse,
    CurrentUserResponse,
    LoginRequest,
    MessageResponse,
    PasswordReset,
    PasswordResetRequest,
    PasswordResetRequestResponse,
    SignupRequest,
    User,
)
from melodyverse.services import auth as auth_service
from melodyverse.services import password_reset as password_reset_service

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/signup", response_model=AuthResponse, status_code=status.HTTP_201_CREATED
)
def signup(body: SignupRequest, db: Session = Depends(get_db)):
    """Register a new account and return a session token."""
    user, token = auth_service.signup(db, body.username, body.email, body.password)
    return AuthResponse(token=token, user=User.model_validate(user))


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, db: Session = Depends(get_db)):
    """
    Login endpoint - returns a session token.
    The 'login' field accepts either the username or the email address.
    """
    user, token = auth_service.login(db, body.login, body.password)
    return AuthResponse(token=token, user=User.model_validate(user))


@router.post(
    "/forgot-password",
    response_model=PasswordResetRequestResponse,
    response_model_exclude_none=True,
)
async def forgot_password(body: PasswordResetRequest, db: Session = Depends(get_db)):
    """Request password reset - issues a single-use token and emails it."""
    reset_token = await password_reset_service.request_reset(db, body.email)

    return PasswordResetRequestResponse(
        message="Password reset requested",
        reset_token=reset_token if settings.expose_reset_token else None,
    )


@router.post("/reset-password", response_model=MessageResponse)
def reset_password(body: PasswordReset, db: Session = Depends(get_db)):
    """Reset password using the token from the reset email."""
    password_reset_service.reset_password(db, body.token, body.password)
    return MessageResponse(message="Password has been reset successfully")


@router.get("/me", response_model=CurrentUserResponse)
def get_current_user_info(current_user: UserModel = Depends(get_current_user)):
    """Get current authenticated user information."""
    return CurrentUserResponse(user=User.model_validate(current_user))
