"""SessionManager owns the authentication state machine.

States: RESTORING -> (AUTHENTICATED | UNAUTHENTICATED), AUTHENTICATED <->
REFRESHING, and any state -> UNAUTHENTICATED on sign-out.

Restore is optimistic: persisted tokens are trusted without asking the
service. A stale token is discovered on the first rejected call, at which
point the caller (or the API client with auto_refresh) invokes
handle_unauthorized(). A failed refresh always ends in a full sign-out. A
refresh overtaken by sign-out or a new sign-in is discarded.
"""

import asyncio
import logging

import httpx

from coachai.db.session_store import SessionStore
from coachai.errors import (
    AuthNetworkError,
    InvalidCredentialsError,
    NoRefreshTokenError,
    SessionChangedError,
)
from coachai.models.session import (
    AuthSnapshot,
    AuthState,
    Credentials,
    RefreshResponse,
    Session,
    SignInResponse,
    SignUpRequest,
)

logger = logging.getLogger(__name__)

SIGN_IN_PATH = "/auth/sign-in"
SIGN_UP_PATH = "/auth/sign-up"
REFRESH_PATH = "/auth/token/refresh"


class SessionManager:
    """Authentication lifecycle for one client process.

    Pass the same instance to every consumer (API client, route guard) so
    they all observe one session.
    """

    def __init__(self, http: httpx.AsyncClient, store: SessionStore | None = None):
        """Initialize the session manager.

        Args:
            http: Client for the coaching service (base URL already set)
            store: Token persistence; defaults to the SQLite-backed store
        """
        self._http = http
        self._store = store or SessionStore()
        self._state = AuthState.RESTORING
        self._session: Session | None = None
        self._refresh_task: asyncio.Task[str] | None = None
        # Bumped whenever the session is established or dropped
        self._generation = 0

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def session(self) -> Session | None:
        return self._session

    @property
    def access_token(self) -> str | None:
        return self._session.access_token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        """True while a session is live, including during a refresh."""
        return self._session is not None and self._state in (
            AuthState.AUTHENTICATED,
            AuthState.REFRESHING,
        )

    @property
    def snapshot(self) -> AuthSnapshot:
        return AuthSnapshot(
            authenticated=self.is_authenticated,
            restoring=self._state == AuthState.RESTORING,
        )

    # ==================== Lifecycle ====================

    async def restore(self) -> AuthState:
        """Rebuild the session from persisted tokens without a network call.

        Returns:
            AUTHENTICATED if both tokens were stored, else UNAUTHENTICATED
        """
        self._state = AuthState.RESTORING
        try:
            tokens = await self._store.load_tokens()
        except Exception:
            self._session = None
            self._state = AuthState.UNAUTHENTICATED
            raise

        self._generation += 1
        if tokens:
            self._session = Session(
                access_token=tokens.access_token,
                refresh_token=tokens.refresh_token,
            )
            self._state = AuthState.AUTHENTICATED
            logger.info("Restored persisted session")
        else:
            self._session = None
            self._state = AuthState.UNAUTHENTICATED
            logger.info("No persisted session found")

        return self._state

    async def sign_in(self, credentials: Credentials) -> Session:
        """Authenticate and persist the returned token pair.

        Raises:
            InvalidCredentialsError: The service answered with a non-success
                status or an unreadable body
            AuthNetworkError: No response was received
        """
        logger.info(f"Attempting sign in with: {credentials.email}")
        try:
            response = await self._http.get(
                SIGN_IN_PATH,
                params={"Login": credentials.email, "Password": credentials.password},
            )
        except httpx.HTTPError as e:
            logger.error(f"Sign in error: {e}")
            raise AuthNetworkError(f"Sign in failed: {e}") from e

        if not response.is_success:
            logger.error(
                f"Sign in failed with status: {response.status_code} "
                f"Error: {response.text[:500]}"
            )
            raise InvalidCredentialsError("Sign in failed", status_code=response.status_code)

        try:
            data = SignInResponse.model_validate(response.json())
        except ValueError as e:
            logger.error(f"Sign in returned an unreadable body: {e}")
            raise InvalidCredentialsError(
                "Sign in failed", status_code=response.status_code
            ) from e

        await self._store.save_tokens(data.access_token, data.refresh_token)
        self._generation += 1
        self._session = Session(
            access_token=data.access_token,
            refresh_token=data.refresh_token,
            expiration_time=data.expiration_time,
        )
        self._state = AuthState.AUTHENTICATED
        logger.info(f"Sign in successful for {credentials.email}")
        return self._session

    async def sign_up(self, credentials: Credentials) -> bool:
        """Register a new account. Does not sign in.

        Returns:
            True if the service accepted the registration, False otherwise

        Raises:
            AuthNetworkError: No response was received
        """
        logger.info(f"Attempting sign up with: {credentials.email}")
        body = SignUpRequest(email=credentials.email, password=credentials.password)
        try:
            response = await self._http.post(SIGN_UP_PATH, json=body.model_dump())
        except httpx.HTTPError as e:
            logger.error(f"Sign up error: {e}")
            raise AuthNetworkError(f"Sign up failed: {e}") from e

        if not response.is_success:
            logger.error(
                f"Sign up failed with status: {response.status_code} "
                f"Error: {response.text[:500]}"
            )
            return False

        logger.info("Sign up successful")
        return True

    async def sign_out(self) -> None:
        """Drop the session in memory and in storage. Idempotent.

        A refresh in flight is detached; its result is discarded when it
        completes.
        """
        self._generation += 1
        self._session = None
        self._state = AuthState.UNAUTHENTICATED
        self._refresh_task = None
        await self._store.clear()
        logger.info("Signed out")

    # ==================== Token Refresh ====================

    async def refresh(self) -> str:
        """Exchange the stored refresh token for a new access token.

        Concurrent callers share a single request. Any failure signs out
        before the error propagates. If the session is signed out or
        replaced while the request is in flight, the result is dropped and
        the newer state is left untouched.

        Returns:
            The new access token

        Raises:
            NoRefreshTokenError: Nothing to refresh with
            InvalidCredentialsError: The service rejected the refresh token
            AuthNetworkError: No response was received
            SessionChangedError: The session changed before the refresh
                completed
        """
        task = self._refresh_task
        if task is None:
            task = asyncio.create_task(self._refresh_or_sign_out())
            task.add_done_callback(self._clear_refresh_task)
            self._refresh_task = task
        return await task

    async def handle_unauthorized(self) -> str:
        """Handle an access token the service has rejected.

        This is the explicit transition for a stale optimistic restore:
        refresh, or sign out if that is impossible.
        """
        logger.warning("Access token rejected by the service, refreshing")
        return await self.refresh()

    def _clear_refresh_task(self, task: asyncio.Task[str]) -> None:
        if self._refresh_task is task:
            self._refresh_task = None

    async def _refresh_or_sign_out(self) -> str:
        generation = self._generation
        try:
            return await self._request_access_token(generation)
        except SessionChangedError:
            logger.info("Session changed during token refresh, discarding result")
            raise
        except Exception as e:
            logger.error(f"Token refresh error: {e}")
            # Only the session the refresh started from is signed out
            if generation == self._generation:
                await self.sign_out()
            raise

    def _check_generation(self, generation: int) -> None:
        if generation != self._generation:
            raise SessionChangedError("Session changed during token refresh")

    async def _request_access_token(self, generation: int) -> str:
        refresh_token = await self._store.get_refresh_token()
        self._check_generation(generation)
        if not refresh_token:
            raise NoRefreshTokenError("No refresh token")

        self._state = AuthState.REFRESHING
        try:
            response = await self._http.get(
                REFRESH_PATH,
                params={"RefreshToken": refresh_token},
            )
        except httpx.HTTPError as e:
            raise AuthNetworkError(f"Token refresh failed: {e}") from e

        if not response.is_success:
            raise InvalidCredentialsError(
                "Token refresh failed", status_code=response.status_code
            )

        try:
            data = RefreshResponse.model_validate(response.json())
        except ValueError as e:
            raise InvalidCredentialsError(
                "Token refresh failed", status_code=response.status_code
            ) from e

        self._check_generation(generation)
        await self._store.save_access_token(data.access_token)
        # Writes share one connection, so a sign-out queued meanwhile still wins
        self._check_generation(generation)

        if self._session is not None:
            self._session = self._session.model_copy(
                update={
                    "access_token": data.access_token,
                    "expiration_time": data.expiration_time,
                }
            )
        else:
            self._session = Session(
                access_token=data.access_token,
                refresh_token=refresh_token,
                expiration_time=data.expiration_time,
            )
        self._state = AuthState.AUTHENTICATED
        logger.info("Access token refreshed")
        return data.access_token
