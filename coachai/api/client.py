"""Authenticated access to the coaching service.

The client attaches the current access token as a bearer credential and
otherwise stays out of the way: it does not retry, and it only refreshes
tokens when constructed with ``auto_refresh=True``.
"""

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter

from coachai.auth.manager import SessionManager
from coachai.errors import ApiConnectionError, ApiError, NotAuthenticatedError
from coachai.models.chat import (
    ChatSession,
    ChatSessionCreate,
    Message,
    SendMessageRequest,
    SendMessageResponse,
)

logger = logging.getLogger(__name__)

CHATS_PATH = "/chats"

_chat_list = TypeAdapter(list[ChatSession])
_message_list = TypeAdapter(list[Message])


class ApiClient:
    """Issues bearer-authenticated requests on behalf of the current session."""

    def __init__(
        self,
        http: httpx.AsyncClient,
        session_manager: SessionManager,
        auto_refresh: bool = False,
    ):
        """Initialize the client.

        Args:
            http: Client for the coaching service (base URL, default headers)
            session_manager: Source of the access token
            auto_refresh: On HTTP 401, refresh the token and retry once
        """
        self._http = http
        self._session_manager = session_manager
        self.auto_refresh = auto_refresh

    def _auth_headers(self) -> dict[str, str]:
        token = self._session_manager.access_token
        if not token:
            raise NotAuthenticatedError("No active session")
        return {"Authorization": f"Bearer {token}"}

    async def request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send an authenticated request.

        Args:
            method: HTTP method
            path: Path relative to the service base URL
            **kwargs: Passed through to httpx (json, params, ...)

        Returns:
            The successful response

        Raises:
            NotAuthenticatedError: No session to authenticate with
            ApiError: Non-success status (carries status code and body)
            ApiConnectionError: No response was received
        """
        response = await self._send(method, path, **kwargs)

        if response.status_code == 401 and self.auto_refresh:
            # Refresh failure signs out and propagates from here
            await self._session_manager.handle_unauthorized()
            response = await self._send(method, path, **kwargs)

        if not response.is_success:
            logger.warning(f"{method} {path} failed with status {response.status_code}")
            raise ApiError(
                f"{method} {path} failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response

    async def _send(
        self,
        method: str,
        path: str,
        headers: dict[str, str] | None = None,
        **kwargs: Any,
    ) -> httpx.Response:
        merged = {**(headers or {}), **self._auth_headers()}
        try:
            return await self._http.request(method, path, headers=merged, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"{method} {path} failed: {e}")
            raise ApiConnectionError(f"{method} {path} failed: {e}") from e

    # ==================== Chats ====================

    async def list_chats(self) -> list[ChatSession]:
        response = await self.request("GET", CHATS_PATH)
        return _chat_list.validate_python(response.json())

    async def create_chat(self, chat: ChatSessionCreate) -> None:
        """Ask the service to create a chat session with the given id."""
        await self.request("POST", CHATS_PATH, json=chat.model_dump(by_alias=True))
        logger.info(f"Created chat {chat.id}")

    async def get_messages(self, chat_id: str) -> list[Message]:
        """Fetch a chat's messages in server order."""
        response = await self.request("GET", f"{CHATS_PATH}/{chat_id}/messages")
        return _message_list.validate_python(response.json())

    async def send_message(self, chat_id: str, text: str) -> str:
        """Submit the user's utterance and return the coach's reply text."""
        body = SendMessageRequest(answer=text)
        response = await self.request(
            "POST",
            f"{CHATS_PATH}/{chat_id}/message",
            json=body.model_dump(),
        )
        return SendMessageResponse.model_validate(response.json()).answer
