"""In-process fake of the coaching service for tests.

Mounted through httpx.ASGITransport, so requests never leave the event loop.
Tests drive it through plain attributes: registered users, stored chats and
messages, the reply text, injected failure statuses and an optional gate that
holds message replies until released.
"""

import asyncio
from typing import Any

import httpx
from fastapi import Body, FastAPI, HTTPException, Request

DEFAULT_EMAIL = "user@example.com"
DEFAULT_PASSWORD = "Secret123"


class FakeCoachService:
    """State and FastAPI app emulating the coaching service endpoints."""

    def __init__(self) -> None:
        self.users: dict[str, str] = {DEFAULT_EMAIL: DEFAULT_PASSWORD}
        self.chats: list[dict[str, Any]] = []
        self.messages: dict[str, list[dict[str, Any]]] = {}
        self.reply_text = "A closure captures variables from its enclosing scope."
        self.failures: dict[str, int] = {}  # route name -> status to answer with
        self.reply_gate: asyncio.Event | None = None
        self.refresh_gate: asyncio.Event | None = None
        self.misspell_refresh_field = False
        self.calls: list[str] = []
        self.received_headers: list[dict[str, str]] = []
        self.valid_access_tokens: set[str] = set()
        self.refresh_tokens: dict[str, str] = {}  # refresh token -> email
        self._token_counter = 0
        self.app = self._build_app()

    # ==================== Test Helpers ====================

    def add_chat(self, chat_id: str, name: str = "Interview prep", **overrides: Any) -> dict:
        chat = {
            "id": chat_id,
            "name": name,
            "technology": "JavaScript",
            "grade": "Junior",
            "questionsAmount": 5,
            "createdAt": "2024-01-15T10:00:00",
        }
        chat.update(overrides)
        self.chats.append(chat)
        self.messages.setdefault(chat_id, [])
        return chat

    def revoke_access_token(self, token: str) -> None:
        self.valid_access_tokens.discard(token)

    def hold_replies(self) -> asyncio.Event:
        """Make message replies wait until the returned event is set."""
        self.reply_gate = asyncio.Event()
        return self.reply_gate

    def hold_refreshes(self) -> asyncio.Event:
        """Make token refresh responses wait until the returned event is set."""
        self.refresh_gate = asyncio.Event()
        return self.refresh_gate

    def _next_token_pair(self) -> tuple[str, str]:
        self._token_counter += 1
        return f"tok{self._token_counter}", f"ref{self._token_counter}"

    def _record(self, name: str, request: Request) -> None:
        self.calls.append(name)
        self.received_headers.append(dict(request.headers))
        status = self.failures.get(name)
        if status:
            raise HTTPException(status_code=status, detail=f"{name} failed")

    def _authorize(self, request: Request) -> None:
        header = request.headers.get("authorization", "")
        token = header.removeprefix("Bearer ").strip()
        if token not in self.valid_access_tokens:
            raise HTTPException(status_code=401, detail="Unauthorized")

    # ==================== App ====================

    def _build_app(self) -> FastAPI:
        app = FastAPI(title="Fake Coach Service")

        @app.get("/auth/sign-in")
        async def sign_in(request: Request) -> dict:
            self._record("sign_in", request)
            email = request.query_params.get("Login", "")
            password = request.query_params.get("Password", "")
            if self.users.get(email) != password:
                raise HTTPException(status_code=400, detail="Invalid login or password")

            access, refresh = self._next_token_pair()
            self.valid_access_tokens.add(access)
            self.refresh_tokens[refresh] = email
            # The real service misspells this field
            return {
                "accessToken": access,
                "refreshTokem": refresh,
                "expirationTime": "2030-01-01T00:00:00",
            }

        @app.post("/auth/sign-up")
        async def sign_up(request: Request, payload: dict[str, Any] = Body(...)) -> dict:
            self._record("sign_up", request)
            email = payload.get("email", "")
            if email in self.users:
                raise HTTPException(status_code=409, detail="User already exists")
            self.users[email] = payload.get("password", "")
            return {}

        @app.get("/auth/token/refresh")
        async def refresh(request: Request) -> dict:
            self._record("refresh", request)
            if self.refresh_gate is not None:
                await self.refresh_gate.wait()
            refresh_token = request.query_params.get("RefreshToken", "")
            if refresh_token not in self.refresh_tokens:
                raise HTTPException(status_code=401, detail="Invalid refresh token")

            access, _ = self._next_token_pair()
            self.valid_access_tokens.add(access)
            key = "expirationTime" if self.misspell_refresh_field else "expirationDate"
            return {"accessToken": access, key: "2030-06-01T00:00:00"}

        @app.get("/chats")
        async def list_chats(request: Request) -> list[dict]:
            self._record("list_chats", request)
            self._authorize(request)
            return self.chats

        @app.post("/chats")
        async def create_chat(request: Request, payload: dict[str, Any] = Body(...)) -> dict:
            self._record("create_chat", request)
            self._authorize(request)
            self.add_chat(
                payload["id"],
                name=payload["name"],
                technology=payload["technology"],
                grade=payload["grade"],
                questionsAmount=payload["questionsAmount"],
            )
            return {"id": payload["id"]}

        @app.get("/chats/{chat_id}/messages")
        async def get_messages(chat_id: str, request: Request) -> list[dict]:
            self._record("get_messages", request)
            self._authorize(request)
            if chat_id not in self.messages:
                raise HTTPException(status_code=404, detail="Chat not found")
            return self.messages[chat_id]

        @app.post("/chats/{chat_id}/message")
        async def send_message(
            chat_id: str, request: Request, payload: dict[str, Any] = Body(...)
        ) -> dict:
            self.calls.append("send_message")
            self.received_headers.append(dict(request.headers))
            self._authorize(request)
            if self.reply_gate is not None:
                await self.reply_gate.wait()
            status = self.failures.get("send_message")
            if status:
                raise HTTPException(status_code=status, detail="send_message failed")

            history = self.messages.setdefault(chat_id, [])
            history.append({"value": payload["answer"], "senderType": "User",
                            "createdAt": "2024-01-15T10:05:00"})
            history.append({"value": self.reply_text, "senderType": "Ai",
                            "createdAt": "2024-01-15T10:05:01"})
            return {"answer": self.reply_text}

        return app


def failing_transport(exc_type: type[httpx.TransportError] = httpx.ConnectError) -> httpx.MockTransport:
    """Transport whose every request fails before a response exists."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("simulated transport failure", request=request)

    return httpx.MockTransport(handler)


async def wait_until(predicate, attempts: int = 1000) -> None:
    """Yield to the event loop until predicate() holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition not reached")
