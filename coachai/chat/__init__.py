"""Chat sessions and their transcripts.

- ChatCatalog: lists and creates coaching sessions
- TranscriptController: ordered messages and single-flight send for one chat
- TranscriptManager: one transcript per chat id
"""

from coachai.chat.catalog import ChatCatalog
from coachai.chat.manager import TranscriptManager
from coachai.chat.transcript import TranscriptController

__all__ = ["ChatCatalog", "TranscriptController", "TranscriptManager"]
