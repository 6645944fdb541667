"""TranscriptController drives one chat session's conversation.

The transcript is append-only: messages keep the order the service returned
them in, and each successful send appends exactly one user message followed by
one assistant message. Only one send may be outstanding at a time; a second
send while one is in flight is ignored rather than queued.
"""

import asyncio
import logging
from datetime import datetime

from coachai.api.client import ApiClient
from coachai.errors import (
    CoachClientError,
    TranscriptFetchError,
    TranscriptSendError,
)
from coachai.models.chat import ChatSession, Message, Sender

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Chat"


class TranscriptController:
    """Ordered message history and send/receive protocol for one chat."""

    def __init__(self, chat_id: str, api: ApiClient):
        self.chat_id = chat_id
        self._api = api
        self._messages: list[Message] = []
        self.chat_session: ChatSession | None = None
        self.draft = ""
        self.error: str | None = None
        self.created_at = datetime.now()
        self.last_activity = datetime.now()
        self._is_loading = False
        self._is_sending = False
        self._ready = False

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    @property
    def is_sending(self) -> bool:
        """Whether a send is outstanding (the single-flight flag)."""
        return self._is_sending

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def ready(self) -> bool:
        """Both metadata and messages have been fetched successfully."""
        return self._ready

    @property
    def title(self) -> str:
        return self.chat_session.title if self.chat_session else DEFAULT_TITLE

    def __len__(self) -> int:
        return len(self._messages)

    # ==================== Loading ====================

    async def load_transcript(self) -> tuple[Message, ...]:
        """Fetch chat metadata and the message history.

        The two requests run concurrently; the transcript is ready only when
        both have completed. Metadata is optional: if the chat list cannot be
        fetched, ``chat_session`` stays None and the title falls back to the
        default.

        Raises:
            TranscriptFetchError: The messages could not be loaded; the
                transcript is left empty
        """
        self._is_loading = True
        self._ready = False
        self.error = None
        self.last_activity = datetime.now()
        try:
            chats, messages = await asyncio.gather(
                self._api.list_chats(),
                self._api.get_messages(self.chat_id),
                return_exceptions=True,
            )
        finally:
            self._is_loading = False

        if isinstance(messages, BaseException):
            self._messages = []
            self.chat_session = None
            if not isinstance(messages, (CoachClientError, ValueError)):
                raise messages
            logger.error(f"Failed to load transcript for chat {self.chat_id}: {messages}")
            self.error = "Failed to load messages"
            raise TranscriptFetchError(
                f"Failed to load transcript: {messages}", chat_id=self.chat_id
            ) from messages

        if isinstance(chats, BaseException):
            if not isinstance(chats, (CoachClientError, ValueError)):
                raise chats
            logger.warning(f"Failed to fetch chat info for chat {self.chat_id}: {chats}")
            self.chat_session = None
        else:
            self.chat_session = next((c for c in chats if c.id == self.chat_id), None)
            if self.chat_session is None:
                logger.warning(f"Chat {self.chat_id} not found in chat list")

        self._messages = list(messages)
        self._ready = True
        logger.info(f"Loaded {len(messages)} message(s) for chat {self.chat_id}")
        return self.messages

    # ==================== Sending ====================

    async def send_message(self, text: str | None = None) -> tuple[Message, Message] | None:
        """Send an utterance and append the exchange on success.

        Args:
            text: Message to send; defaults to the pending draft

        Returns:
            The appended (user, assistant) pair, or None if the call was
            ignored because the text was blank or a send is already in flight

        Raises:
            TranscriptSendError: The service did not reply. Nothing is
                appended and the cleared draft is not restored.
        """
        if self._is_sending:
            logger.debug(f"Send already in flight for chat {self.chat_id}, ignoring")
            return None

        message_text = (self.draft if text is None else text).strip()
        if not message_text:
            return None

        # Draft is cleared before the request and stays cleared on failure
        self.draft = ""
        self._is_sending = True
        self.last_activity = datetime.now()

        try:
            reply = await self._api.send_message(self.chat_id, message_text)
        except (CoachClientError, ValueError) as e:
            logger.error(f"Failed to send message: {e}")
            raise TranscriptSendError(
                f"Failed to send message: {e}", chat_id=self.chat_id
            ) from e
        finally:
            self._is_sending = False

        return self._append_exchange(message_text, reply)

    def _append_exchange(self, user_text: str, reply_text: str) -> tuple[Message, Message]:
        """Record a completed exchange.

        Timestamps are taken locally; the service's copy of the messages is
        not consulted and carries no identity we track.
        """
        user_message = Message(text=user_text, sender=Sender.USER, timestamp=datetime.now())
        ai_message = Message(
            text=reply_text, sender=Sender.ASSISTANT, timestamp=datetime.now()
        )
        self._messages.extend((user_message, ai_message))
        return user_message, ai_message

    def get_info(self) -> dict:
        """Get transcript information."""
        return {
            "chat_id": self.chat_id,
            "title": self.title,
            "created_at": self.created_at.isoformat(),
            "last_activity": self.last_activity.isoformat(),
            "message_count": len(self._messages),
            "ready": self._ready,
            "is_sending": self._is_sending,
            "error": self.error,
        }
