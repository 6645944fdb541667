"""Exception hierarchy for the CoachAI client.

Session and transcript operations surface failures to their caller instead of
retrying. The only automatic corrective action is the forced sign-out that
follows a failed token refresh.
"""

from typing import Any


class CoachClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# ==================== Authentication ====================


class AuthError(CoachClientError):
    """Authentication or session lifecycle failure."""

    pass


class InvalidCredentialsError(AuthError):
    """The service answered with a non-success status.

    Wrong passwords and server-side failures are not told apart.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthNetworkError(AuthError):
    """The request never produced an HTTP response."""

    pass


class NoRefreshTokenError(AuthError):
    """A refresh was requested but no refresh token is stored."""

    pass


class NotAuthenticatedError(AuthError):
    """An authenticated call was attempted without a live session."""

    pass


class SessionChangedError(AuthError):
    """The session was signed out or replaced while a refresh was in flight.

    The refresh result is discarded.
    """

    pass


# ==================== API ====================


class ApiError(CoachClientError):
    """The remote service returned a non-success status."""

    def __init__(self, message: str, status_code: int, body: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code == 401


class ApiConnectionError(CoachClientError):
    """Transport-level failure (connection refused, TLS, timeout)."""

    pass


# ==================== Transcript ====================


class TranscriptError(CoachClientError):
    """Failure while loading or extending a transcript."""

    def __init__(self, message: str, chat_id: str | None = None):
        super().__init__(message)
        self.chat_id = chat_id


class TranscriptFetchError(TranscriptError):
    """The transcript or its chat metadata could not be loaded."""

    pass


class TranscriptSendError(TranscriptError):
    """A message could not be delivered or no reply was received."""

    pass


# ==================== Validation ====================


class ChatValidationError(CoachClientError):
    """Chat creation form failed validation."""

    def __init__(self, message: str, errors: dict[str, Any] | None = None):
        super().__init__(message)
        self.errors = errors or {}
