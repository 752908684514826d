"""Credential service: signup, login and session token resolution."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

import melodyverse.repositories.user as user_repo
from melodyverse.core.security import (
    create_access_token,
    decode_token,
    get_password_hash,
    verify_dummy_password,
    verify_password,
)
from melodyverse.core.validation import (
    normalize_email,
    normalize_username,
    validate_login,
    validate_signup,
)
from melodyverse.db.models.user import User as UserModel
from melodyverse.errors import AuthError, ConflictError, InternalError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def _issue_token(user: UserModel) -> str:
    return create_access_token(data={"sub": user.id, "username": user.username})


def _check_available(db: Session, username: str, email: str) -> None:
    """
    Raise ConflictError if the email or username is taken.

    Email is checked first, so a signup colliding on both reports the email.
    """
    if user_repo.get_user_by_email(db, email):
        raise ConflictError("Email already registered")
    if user_repo.get_user_by_username(db, username):
        raise ConflictError("Username already taken")


def signup(db: Session, username: str, email: str, password: str) -> tuple[UserModel, str]:
    """
    Register a new user and issue a session token.

    Raises:
        DomainValidationError: If username, email or password is invalid.
        ConflictError: If the email or username is already registered.
    """
    username = normalize_username(username)
    email = normalize_email(email)
    validate_signup(username, email, password)

    _check_available(db, username, email)

    password_hash = get_password_hash(password)
    try:
        user = user_repo.create_user(
            db, username=username, email=email, password_hash=password_hash
        )
    except IntegrityError as e:
        # Lost a race with a concurrent signup; the unique index decided.
        _check_available(db, username, email)
        raise InternalError("Could not create user") from e

    logger.info("User registered: id=%s username=%s", user.id, user.username)
    return user, _issue_token(user)


def login(db: Session, login: str, password: str) -> tuple[UserModel, str]:
    """
    Authenticate by username or email and password, return user and token.

    Raises:
        DomainValidationError: If either field is empty.
        AuthError: If no user matches or the password is wrong.
    """
    login = login.strip()
    validate_login(login, password)

    # Both the username and the email match are tried, so an identifier that
    # names one user's username and another user's email works for both.
    candidates = [
        user_repo.get_user_by_username(db, login),
        user_repo.get_user_by_email(db, normalize_email(login)),
    ]
    candidates = [user for user in candidates if user is not None]

    if not candidates:
        verify_dummy_password(password)

    for user in candidates:
        if verify_password(password, user.password_hash):
            return user, _issue_token(user)

    logger.info("Failed login attempt for %r", login)
    raise AuthError(INVALID_CREDENTIALS)


def get_current_user(db: Session, token: str) -> UserModel:
    """
    Resolve a session token to its user.

    Raises:
        AuthError: If the token is invalid, expired, not an access token,
            or its user no longer exists.
    """
    payload = decode_token(token)
    if payload is None or payload.get("type") != "access":
        raise AuthError("Could not validate credentials")

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise AuthError("Could not validate credentials")

    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AuthError("Could not validate credentials")
    return user
