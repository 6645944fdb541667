"""Credential and form validation.

Pure functions, no I/O. Each ``validate_*`` field check returns an empty
string when the value is acceptable (or not typed yet) and a user-facing
message otherwise, so the result can be shown next to the field as-is.
"""

import re

from pydantic import BaseModel, Field

EMAIL_MIN_LENGTH = 6
EMAIL_MAX_LENGTH = 30
PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 30

EMAIL_CHARSET = re.compile(r"^[a-zA-Z0-9@._-]+$")
EMAIL_FORMAT = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_CHARSET = re.compile(r"""^[a-zA-Z0-9!@#$%^&*()_+\-=\[\]{};':"\\|,.<>/?]+$""")
HAS_LETTER = re.compile(r"[a-zA-Z]")
HAS_DIGIT = re.compile(r"[0-9]")


class ValidationResult(BaseModel):
    """Validation messages keyed by field name."""

    errors: dict[str, str] = Field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field: str, message: str) -> None:
        if message:
            self.errors[field] = message

    def first_error(self) -> str | None:
        return next(iter(self.errors.values()), None)


def validate_email(email: str) -> str:
    """Check email length, character set and shape."""
    if len(email) == 0:
        return ""
    if len(email) < EMAIL_MIN_LENGTH:
        return f"Email must be at least {EMAIL_MIN_LENGTH} characters"
    if len(email) > EMAIL_MAX_LENGTH:
        return f"Email must be less than {EMAIL_MAX_LENGTH} characters"
    if not EMAIL_CHARSET.match(email):
        return "Email can only contain Latin characters, numbers, @, . _ -"
    if not EMAIL_FORMAT.match(email):
        return "Please enter a valid email format"
    return ""


def validate_password(password: str) -> str:
    """Check password length, character set and character classes."""
    if len(password) == 0:
        return ""
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters"
    if len(password) > PASSWORD_MAX_LENGTH:
        return f"Password must be less than {PASSWORD_MAX_LENGTH} characters"
    if not PASSWORD_CHARSET.match(password):
        return "Password can only contain Latin characters and allowed symbols"
    if not HAS_LETTER.search(password):
        return "Password must contain at least one letter"
    if not HAS_DIGIT.search(password):
        return "Password must contain at least one number"
    return ""


def validate_confirm_password(confirm_password: str, password: str) -> str:
    if len(confirm_password) == 0:
        return ""
    if password and confirm_password != password:
        return "Passwords do not match"
    return ""


def validate_sign_in(email: str, password: str) -> ValidationResult:
    """Gate a sign-in submission.

    Only the email shape is checked; password rules apply at sign-up.
    """
    result = ValidationResult()
    result.add("email", validate_email(email) or _required(email, "Email"))
    result.add("password", _required(password, "Password"))
    return result


def validate_sign_up(email: str, password: str, confirm_password: str) -> ValidationResult:
    """Gate a sign-up submission."""
    result = ValidationResult()
    result.add("email", validate_email(email) or _required(email, "Email"))
    result.add("password", validate_password(password) or _required(password, "Password"))
    result.add(
        "confirm_password",
        validate_confirm_password(confirm_password, password)
        or _required(confirm_password, "Password confirmation"),
    )
    return result


def validate_chat_form(
    name: str,
    technology: str | None,
    grade: str | None,
) -> ValidationResult:
    """Gate creation of a new coaching session."""
    result = ValidationResult()
    if not name.strip():
        result.add("name", "Session name is required")
    if not technology:
        result.add("technology", "Technology selection is required")
    if not grade:
        result.add("grade", "Experience level selection is required")
    return result


def _required(value: str, label: str) -> str:
    return "" if value else f"{label} is required"
