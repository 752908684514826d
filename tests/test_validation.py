import pytest

from melodyverse.core.validation import (
    is_valid_email,
    normalize_email,
    validate_login,
    validate_signup,
)
from melodyverse.errors import DomainValidationError


@pytest.mark.parametrize("email", ["a@x.com", "test.user+tag@example.com"])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", ["", "invalid-email", "a@", "@x.com", "a b@x.com"])
def test_invalid_emails(email):
    assert not is_valid_email(email)


def test_normalize_email():
    assert normalize_email("  Alice@Example.COM ") == "alice@example.com"


def test_validate_signup_accepts_valid_input():
    validate_signup("alice", "a@x.com", "secret1")


def test_validate_signup_lists_failing_fields():
    with pytest.raises(DomainValidationError) as exc_info:
        validate_signup("alice", "invalid-email", "12345")
    assert [e["field"] for e in exc_info.value.errors] == ["email", "password"]


def test_validate_signup_username_too_long():
    with pytest.raises(DomainValidationError) as exc_info:
        validate_signup("a" * 51, "a@x.com", "secret1")
    assert exc_info.value.errors[0]["field"] == "username"


def test_validate_login_requires_both_fields():
    with pytest.raises(DomainValidationError) as exc_info:
        validate_login("alice", "")
    assert [e["field"] for e in exc_info.value.errors] == ["password"]
