"""Pydantic models for chat sessions and transcript messages."""

import uuid
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Technology(str, Enum):
    """Technologies a coaching session can focus on."""

    JAVA = "Java"
    NET = "NET"
    JAVASCRIPT = "JavaScript"
    HTML_AND_CSS = "HTMLandCSS"
    DOCKER = "Docker"
    CPLUSPLUS = "CPlusPlus"
    DEVOPS = "DevOps"

    @property
    def label(self) -> str:
        return TECHNOLOGY_LABELS[self]


TECHNOLOGY_LABELS: dict[Technology, str] = {
    Technology.JAVA: "Java",
    Technology.NET: ".NET",
    Technology.JAVASCRIPT: "JavaScript",
    Technology.HTML_AND_CSS: "HTML & CSS",
    Technology.DOCKER: "Docker",
    Technology.CPLUSPLUS: "C++",
    Technology.DEVOPS: "DevOps",
}


class ExperienceGrade(str, Enum):
    """Experience level the coach calibrates questions to."""

    TRAINEE = "Trainee"
    JUNIOR = "Junior"
    STRONG_JUNIOR = "StrongJunior"
    MIDDLE = "Middle"
    STRONG_MIDDLE = "StrongMiddle"
    SENIOR = "Senior"

    @property
    def label(self) -> str:
        return GRADE_LABELS[self]


GRADE_LABELS: dict[ExperienceGrade, str] = {
    ExperienceGrade.TRAINEE: "Trainee",
    ExperienceGrade.JUNIOR: "Junior",
    ExperienceGrade.STRONG_JUNIOR: "Strong Junior",
    ExperienceGrade.MIDDLE: "Middle",
    ExperienceGrade.STRONG_MIDDLE: "Strong Middle",
    ExperienceGrade.SENIOR: "Senior",
}

DEFAULT_QUESTION_COUNT = 5


class Sender(str, Enum):
    """Author of a transcript message."""

    USER = "User"
    ASSISTANT = "Ai"

    @classmethod
    def _missing_(cls, value: object) -> "Sender | None":
        if isinstance(value, str):
            normalized = value.strip().lower()
            if normalized == "user":
                return cls.USER
            if normalized in ("ai", "assistant", "bot"):
                return cls.ASSISTANT
        return None


class Message(BaseModel):
    """A single transcript entry. Immutable once built."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    text: str = Field(..., alias="value")
    sender: Sender = Field(..., alias="senderType")
    # Kept as the raw string when the service sends something unparseable
    timestamp: datetime | str = Field(..., alias="createdAt", union_mode="left_to_right")

    @property
    def is_user(self) -> bool:
        return self.sender == Sender.USER


class ChatSession(BaseModel):
    """A coaching conversation as defined by the service.

    Technology and grade are kept as plain strings so unknown values coming
    back from the service do not break listing.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    name: str
    technology: str
    experience_grade: str = Field(..., alias="grade")
    question_count: int | None = Field(None, alias="questionsAmount")
    created_at: datetime | None = Field(None, alias="createdAt")

    @property
    def title(self) -> str:
        """Header line shown above a transcript."""
        return f"{self.name} - {self.technology} ({self.experience_grade})"


class ChatSessionCreate(BaseModel):
    """Request body for ``POST /chats``."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str = Field(..., min_length=1)
    technology: Technology
    grade: ExperienceGrade
    questions_amount: int = Field(
        DEFAULT_QUESTION_COUNT, ge=1, alias="questionsAmount"
    )


class SendMessageRequest(BaseModel):
    """Request body for ``POST /chats/{id}/message``."""

    answer: str


class SendMessageResponse(BaseModel):
    """Reply body for ``POST /chats/{id}/message``."""

    answer: str
