"""Password reset service: single-use, time-limited reset tokens."""

import logging

from aiosmtplib import SMTPException
from sqlalchemy.orm import Session

import melodyverse.repositories.user as user_repo
from melodyverse.core.security import (
    generate_password_reset_token,
    get_password_hash,
    hash_reset_token,
    password_reset_expiry,
)
from melodyverse.core.validation import (
    normalize_email,
    validate_email_address,
    validate_new_password,
)
from melodyverse.errors import DomainValidationError, NotFoundError
from melodyverse.services.email import send_password_reset_email

logger = logging.getLogger(__name__)

INVALID_TOKEN = "Invalid or expired token"


async def request_reset(db: Session, email: str) -> str:
    """
    Issue a password reset token for the account registered under ``email``.

    Only the token's hash is stored; any earlier token for the user is
    replaced. The plaintext token is emailed and also returned to the caller.
    Email delivery failures are logged, not raised.

    Raises:
        DomainValidationError: If the email is malformed.
        NotFoundError: If no account uses this email.
    """
    email = normalize_email(email)
    validate_email_address(email)

    user = user_repo.get_user_by_email(db, email)
    if not user:
        raise NotFoundError("No account found with that email")

    reset_token = generate_password_reset_token()
    user_repo.set_password_reset_token(
        db, user.id, hash_reset_token(reset_token), password_reset_expiry()
    )
    logger.info("Password reset token issued for user id=%s", user.id)

    try:
        await send_password_reset_email(user.email, reset_token)
    except (ValueError, SMTPException, OSError) as e:
        logger.error("Failed to send password reset email to user id=%s: %s", user.id, e)

    return reset_token


def reset_password(db: Session, token: str, new_password: str) -> None:
    """
    Set a new password using a reset token and consume the token.

    Raises:
        DomainValidationError: If the password is too short, or the token is
            unknown, expired or already used.
    """
    validate_new_password(new_password)

    if not token:
        raise DomainValidationError(INVALID_TOKEN)

    token_hash = hash_reset_token(token)
    user = user_repo.get_user_by_reset_token_hash(db, token_hash)
    if not user:
        raise DomainValidationError(INVALID_TOKEN)

    password_hash = get_password_hash(new_password)
    if not user_repo.consume_password_reset_token(db, user.id, token_hash, password_hash):
        raise DomainValidationError(INVALID_TOKEN)

    logger.info("Password reset completed for user id=%s", user.id)
