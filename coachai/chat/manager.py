"""TranscriptManager keeps one transcript per chat session."""

import logging
from typing import Any

from coachai.api.client import ApiClient
from coachai.chat.transcript import TranscriptController

logger = logging.getLogger(__name__)


class TranscriptManager:
    """Owns the in-memory transcripts of this process.

    Transcripts are never persisted; they are rebuilt from the service with
    load_transcript() and dropped on sign-out.
    """

    def __init__(self, api: ApiClient):
        self._api = api
        self._transcripts: dict[str, TranscriptController] = {}

    @property
    def active_transcript_count(self) -> int:
        return len(self._transcripts)

    def get_transcript(self, chat_id: str) -> TranscriptController:
        """Get the transcript for a chat, creating an empty one if needed."""
        transcript = self._transcripts.get(chat_id)
        if transcript is None:
            transcript = TranscriptController(chat_id, self._api)
            self._transcripts[chat_id] = transcript
            logger.debug(f"Created transcript for chat {chat_id}")
        return transcript

    async def open_transcript(self, chat_id: str) -> TranscriptController:
        """Get a chat's transcript and (re)load it from the service.

        Raises:
            TranscriptFetchError: Loading failed; the transcript is empty
        """
        transcript = self.get_transcript(chat_id)
        await transcript.load_transcript()
        return transcript

    def discard(self, chat_id: str) -> bool:
        """Forget a transcript.

        Returns:
            True if one was held for the chat
        """
        return self._transcripts.pop(chat_id, None) is not None

    def clear(self) -> int:
        """Forget all transcripts.

        Returns:
            Number of transcripts dropped
        """
        count = len(self._transcripts)
        self._transcripts.clear()
        if count:
            logger.info(f"Discarded {count} transcript(s)")
        return count

    def get_stats(self) -> dict[str, Any]:
        return {
            "active_transcripts": len(self._transcripts),
            "sending": [cid for cid, t in self._transcripts.items() if t.is_sending],
            "messages_by_chat": {cid: len(t) for cid, t in self._transcripts.items()},
        }
