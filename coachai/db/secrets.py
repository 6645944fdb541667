"""Encryption of values kept in client storage.

Uses Fernet symmetric encryption. Key material comes from an explicit
configuration call or the COACHAI_SECRETS_KEY environment variable.
"""

import base64
import hashlib
import os
from functools import lru_cache

from cryptography.fernet import Fernet, InvalidToken

from coachai.errors import CoachClientError

# Set by configure_secrets_key(); takes precedence over the environment
_key_material: str | None = None


class SecretsError(CoachClientError):
    """Error related to stored-value encryption."""

    pass


def configure_secrets_key(key_material: str | None) -> None:
    """Override the key material used for encryption.

    Passing None reverts to the environment lookup.
    """
    global _key_material
    _key_material = key_material
    _get_fernet.cache_clear()


def _resolve_key_material() -> str:
    if _key_material:
        return _key_material

    key_material = os.environ.get("COACHAI_SECRETS_KEY")
    if key_material:
        return key_material

    # Development fallback: derive key from database path
    # NOT SECURE FOR PRODUCTION - should always set COACHAI_SECRETS_KEY
    db_path = os.environ.get("COACHAI_DATABASE_PATH", "./data/coachai.db")
    return f"dev-secrets-key-{db_path}"


@lru_cache(maxsize=1)
def _get_fernet() -> Fernet:
    """Get the Fernet cipher for the current key material."""
    # Derive a valid Fernet key (32 bytes, base64-encoded)
    key_hash = hashlib.sha256(_resolve_key_material().encode()).digest()
    return Fernet(base64.urlsafe_b64encode(key_hash))


def encrypt_secret(value: str) -> str:
    """Encrypt a value.

    Args:
        value: The plaintext value

    Returns:
        Base64-encoded encrypted value
    """
    encrypted = _get_fernet().encrypt(value.encode("utf-8"))
    return encrypted.decode("utf-8")


def decrypt_secret(encrypted_value: str) -> str:
    """Decrypt a value.

    Raises:
        SecretsError: If decryption fails (wrong key or corrupted value)
    """
    try:
        decrypted = _get_fernet().decrypt(encrypted_value.encode("utf-8"))
        return decrypted.decode("utf-8")
    except InvalidToken as e:
        raise SecretsError("Failed to decrypt stored value") from e
