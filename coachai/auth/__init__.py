"""Authentication: session lifecycle, credential checks and route gating."""

from coachai.auth.guard import RouteAccess, RouteDecision, RouteGuard
from coachai.auth.manager import SessionManager
from coachai.auth.validation import (
    ValidationResult,
    validate_chat_form,
    validate_confirm_password,
    validate_email,
    validate_password,
    validate_sign_in,
    validate_sign_up,
)

__all__ = [
    "RouteAccess",
    "RouteDecision",
    "RouteGuard",
    "SessionManager",
    "ValidationResult",
    "validate_chat_form",
    "validate_confirm_password",
    "validate_email",
    "validate_password",
    "validate_sign_in",
    "validate_sign_up",
]
