"""Persisted session tokens.

The store keeps exactly two values, the access token and the refresh token,
under fixed keys. Nothing else about the session (expiry, user) is written,
and no client-side expiry is enforced. Concurrent writers are last-writer-wins.
"""

import logging
from datetime import datetime

from coachai.db.database import get_db
from coachai.db.secrets import SecretsError, decrypt_secret, encrypt_secret
from coachai.models.session import StoredTokens

logger = logging.getLogger(__name__)

ACCESS_TOKEN_KEY = "accessToken"
REFRESH_TOKEN_KEY = "refreshToken"


class SessionStore:
    """Reads and writes the token pair in client storage."""

    async def get_value(self, key: str) -> str | None:
        """Get a decrypted value, or None if missing or unreadable."""
        db = await get_db()

        cursor = await db.execute(
            "SELECT value FROM client_storage WHERE key = ?",
            [key],
        )
        row = await cursor.fetchone()

        if not row:
            return None

        try:
            return decrypt_secret(row["value"])
        except SecretsError:
            # Written under a different key; treat as absent
            logger.warning(f"Stored value '{key}' could not be decrypted, ignoring it")
            return None

    async def set_value(self, key: str, value: str) -> None:
        """Set or replace a value."""
        db = await get_db()
        now = datetime.utcnow().isoformat()

        await db.execute(
            """
            INSERT INTO client_storage (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            [key, encrypt_secret(value), now],
        )
        await db.commit()

    async def remove_values(self, *keys: str) -> None:
        """Delete values; missing keys are ignored."""
        if not keys:
            return
        db = await get_db()

        placeholders = ", ".join("?" for _ in keys)
        await db.execute(
            f"DELETE FROM client_storage WHERE key IN ({placeholders})",
            list(keys),
        )
        await db.commit()

    # ==================== Token Pair ====================

    async def load_tokens(self) -> StoredTokens | None:
        """Return the persisted pair, or None unless both tokens are present."""
        access_token = await self.get_value(ACCESS_TOKEN_KEY)
        refresh_token = await self.get_value(REFRESH_TOKEN_KEY)

        if not access_token or not refresh_token:
            return None

        return StoredTokens(access_token=access_token, refresh_token=refresh_token)

    async def get_refresh_token(self) -> str | None:
        return await self.get_value(REFRESH_TOKEN_KEY)

    async def save_tokens(self, access_token: str, refresh_token: str) -> None:
        await self.set_value(ACCESS_TOKEN_KEY, access_token)
        await self.set_value(REFRESH_TOKEN_KEY, refresh_token)

    async def save_access_token(self, access_token: str) -> None:
        await self.set_value(ACCESS_TOKEN_KEY, access_token)

    async def clear(self) -> None:
        """Remove both tokens."""
        await self.remove_values(ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY)
