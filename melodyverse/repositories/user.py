from datetime import datetime, timezone

from sqlalchemy.orm import Session

from melodyverse.db.models.user import User as UserModel
from melodyverse.errors import NotFoundError


def get_user_by_email(db: Session, email: str) -> UserModel | None:
    """Get a user by (normalized) email."""
    return db.query(UserModel).filter(UserModel.email == email).first()


def get_user_by_username(db: Session, username: str) -> UserModel | None:
    """Get a user by username."""
    return db.query(UserModel).filter(UserModel.username == username).first()


def get_user_by_id(db: Session, user_id: int) -> UserModel | None:
    """Get a user by ID."""
    return db.query(UserModel).filter(UserModel.id == user_id).first()


def get_user_by_reset_token_hash(db: Session, token_hash: str) -> UserModel | None:
    """Get the user holding an unexpired password reset token with this hash."""
    return (
        db.query(UserModel)
        .filter(
            UserModel.password_reset_token_hash == token_hash,
            UserModel.password_reset_expires > datetime.now(timezone.utc),
        )
        .first()
    )


def create_user(
    db: Session,
    username: str,
    email: str,
    password_hash: str,
) -> UserModel:
    """
    Create a new user in the database. Pure data access - no business logic.

    Raises sqlalchemy.exc.IntegrityError when the username or email is taken;
    the session is rolled back before it propagates.
    """
    db_user = UserModel(
        username=username,
        email=email,
        password_hash=password_hash,
    )
    db.add(db_user)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(db_user)
    return db_user


def set_password_reset_token(
    db: Session, user_id: int, token_hash: str, expires: datetime
) -> UserModel:
    """Set (or replace) the password reset token for a user."""
    user = get_user_by_id(db, user_id)
    if not user:
        raise NotFoundError("User not found")

    user.password_reset_token_hash = token_hash
    user.password_reset_expires = expires
    db.commit()
    db.refresh(user)
    return user


def consume_password_reset_token(
    db: Session, user_id: int, token_hash: str, password_hash: str
) -> bool:
    """
    Update a user's password and clear the reset token in one statement.

    Only applies while the stored token hash still matches, so a token can be
    consumed at most once. Returns False if no row was updated.
    """
    updated = (
        db.query(UserModel)
        .filter(
            UserModel.id == user_id,
            UserModel.password_reset_token_hash == token_hash,
        )
        .update(
            {
                UserModel.password_hash: password_hash,
                UserModel.password_reset_token_hash: None,
                UserModel.password_reset_expires: None,
            },
            synchronize_session=False,
        )
    )
    db.commit()
    return updated == 1
