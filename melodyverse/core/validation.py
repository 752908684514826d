"""Input checks shared by the credential and password reset services."""

from email_validator import EmailNotValidError, validate_email

from melodyverse.core.security import validate_password
from melodyverse.errors import DomainValidationError

USERNAME_MAX_LENGTH = 50


def normalize_email(email: str) -> str:
    return email.strip().lower()


def normalize_username(username: str) -> str:
    return username.strip()


def is_valid_email(email: str) -> bool:
    """Check email address grammar (no DNS lookups)."""
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _raise_if_errors(errors: list[dict[str, str]]) -> None:
    if errors:
        message = "; ".join(error["message"] for error in errors)
        raise DomainValidationError(message, errors=errors)


def validate_signup(username: str, email: str, password: str) -> None:
    """
    Validate signup input, collecting every failing field.

    Expects already-normalized username and email.

    Raises:
        DomainValidationError: If any field is invalid.
    """
    errors = []
    if not username:
        errors.append({"field": "username", "message": "Username is required"})
    elif len(username) > USERNAME_MAX_LENGTH:
        errors.append(
            {
                "field": "username",
                "message": f"Username must be at most {USERNAME_MAX_LENGTH} characters",
            }
        )
    elif "@" in username:
        # Login treats identifiers as usernames or emails
        errors.append({"field": "username", "message": "Username must not contain '@'"})

    if not email:
        errors.append({"field": "email", "message": "Email is required"})
    elif not is_valid_email(email):
        errors.append({"field": "email", "message": "Please provide a valid email"})

    is_valid, error_message = validate_password(password)
    if not is_valid:
        errors.append({"field": "password", "message": error_message})

    _raise_if_errors(errors)


def validate_login(login: str, password: str) -> None:
    errors = []
    if not login:
        errors.append({"field": "login", "message": "Username or email is required"})
    if not password:
        errors.append({"field": "password", "message": "Password is required"})
    _raise_if_errors(errors)


def validate_email_address(email: str) -> None:
    if not email:
        _raise_if_errors([{"field": "email", "message": "Email is required"}])
    if not is_valid_email(email):
        _raise_if_errors([{"field": "email", "message": "Please provide a valid email"}])


def validate_new_password(password: str) -> None:
    is_valid, error_message = validate_password(password)
    if not is_valid:
        _raise_if_errors([{"field": "password", "message": error_message}])
