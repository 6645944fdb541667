"""CoachClient wires the client components together."""

import logging

import httpx

from coachai.api.client import ApiClient
from coachai.api.http import create_http_client
from coachai.auth.guard import RouteGuard
from coachai.auth.manager import SessionManager
from coachai.chat.catalog import ChatCatalog
from coachai.chat.manager import TranscriptManager
from coachai.config import ClientSettings
from coachai.db.database import close_database, init_database
from coachai.db.secrets import configure_secrets_key
from coachai.db.session_store import SessionStore

logger = logging.getLogger(__name__)


class CoachClient:
    """One running client: storage, HTTP, session and transcripts.

    Use as an async context manager; entering opens storage and restores any
    persisted session, exiting closes everything.

    Example:
        async with CoachClient(ClientSettings.from_env()) as client:
            if not client.session.is_authenticated:
                await client.session.sign_in(Credentials(email=..., password=...))
            transcript = await client.transcripts.open_transcript(chat_id)
            await transcript.send_message("What is a closure?")
    """

    def __init__(
        self,
        settings: ClientSettings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Build the components. Nothing is opened until start().

        Args:
            settings: Client settings; defaults to ClientSettings.from_env()
            transport: Optional httpx transport override
        """
        self.settings = settings or ClientSettings.from_env()
        self.http = create_http_client(self.settings, transport=transport)
        self.session = SessionManager(self.http, SessionStore())
        self.api = ApiClient(self.http, self.session, auto_refresh=self.settings.auto_refresh)
        self.chats = ChatCatalog(self.api)
        self.transcripts = TranscriptManager(self.api)
        self.guard = RouteGuard(self.session)

    async def start(self) -> None:
        """Open storage and restore the persisted session."""
        if self.settings.secrets_key:
            configure_secrets_key(self.settings.secrets_key)
        await init_database(self.settings.database_path)
        state = await self.session.restore()
        logger.info(f"CoachAI client started against {self.settings.base_url} ({state.value})")

    async def close(self) -> None:
        await self.http.aclose()
        await close_database()
        logger.info("CoachAI client closed")

    async def sign_out(self) -> None:
        """Sign out and drop every in-memory transcript."""
        await self.session.sign_out()
        self.transcripts.clear()

    async def __aenter__(self) -> "CoachClient":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
