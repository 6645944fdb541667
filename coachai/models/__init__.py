"""Pydantic models for the CoachAI client."""

from coachai.models.chat import (
    DEFAULT_QUESTION_COUNT,
    ChatSession,
    ChatSessionCreate,
    ExperienceGrade,
    Message,
    SendMessageRequest,
    SendMessageResponse,
    Sender,
    Technology,
)
from coachai.models.session import (
    AuthSnapshot,
    AuthState,
    Credentials,
    RefreshResponse,
    Session,
    SignInResponse,
    SignUpRequest,
    StoredTokens,
)

__all__ = [
    # Session
    "AuthSnapshot",
    "AuthState",
    "Credentials",
    "Session",
    "StoredTokens",
    "SignInResponse",
    "SignUpRequest",
    "RefreshResponse",
    # Chat
    "ChatSession",
    "ChatSessionCreate",
    "DEFAULT_QUESTION_COUNT",
    "ExperienceGrade",
    "Message",
    "Sender",
    "SendMessageRequest",
    "SendMessageResponse",
    "Technology",
]
