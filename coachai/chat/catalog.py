"""Listing and creating coaching sessions."""

import logging

from coachai.api.client import ApiClient
from coachai.auth.validation import validate_chat_form
from coachai.errors import ChatValidationError
from coachai.models.chat import (
    DEFAULT_QUESTION_COUNT,
    ChatSession,
    ChatSessionCreate,
    ExperienceGrade,
    Technology,
)

logger = logging.getLogger(__name__)


class ChatCatalog:
    """The user's chat sessions as known to the service."""

    def __init__(self, api: ApiClient):
        self._api = api

    async def list_chats(self) -> list[ChatSession]:
        return await self._api.list_chats()

    async def find_chat(self, chat_id: str) -> ChatSession | None:
        chats = await self._api.list_chats()
        return next((c for c in chats if c.id == chat_id), None)

    async def create_chat(
        self,
        name: str,
        technology: Technology | str | None,
        grade: ExperienceGrade | str | None,
        question_count: int = DEFAULT_QUESTION_COUNT,
    ) -> ChatSession | None:
        """Create a chat session and return it as listed by the service.

        The id is generated here; the service stores the session under it.

        Returns:
            The new ChatSession, or None if the service does not list it

        Raises:
            ChatValidationError: The form is incomplete or has unknown values
            ApiError: The service rejected the request
        """
        validation = validate_chat_form(name, technology, grade)
        if not validation.is_valid:
            raise ChatValidationError(
                validation.first_error() or "Invalid chat form",
                errors=validation.errors,
            )

        try:
            request = ChatSessionCreate(
                name=name.strip(),
                technology=Technology(technology),
                grade=ExperienceGrade(grade),
                questions_amount=question_count,
            )
        except ValueError as e:
            raise ChatValidationError(f"Invalid chat form: {e}") from e

        await self._api.create_chat(request)
        logger.info(f"Created chat session '{request.name}' ({request.id})")
        return await self.find_chat(request.id)
