"""Pydantic models for authentication state and token payloads."""

from datetime import datetime
from enum import Enum

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AuthState(str, Enum):
    """States of the session lifecycle."""

    UNAUTHENTICATED = "unauthenticated"
    RESTORING = "restoring"  # Startup, persisted tokens not read yet
    AUTHENTICATED = "authenticated"
    REFRESHING = "refreshing"


class Credentials(BaseModel):
    """Email/password pair. Never persisted."""

    email: str
    password: str = Field(..., repr=False)


class Session(BaseModel):
    """The live authenticated token pair."""

    access_token: str = Field(..., repr=False)
    refresh_token: str = Field(..., repr=False)
    expiration_time: datetime | None = None


class StoredTokens(BaseModel):
    """The token pair as kept in the session store."""

    access_token: str = Field(..., repr=False)
    refresh_token: str = Field(..., repr=False)


class AuthSnapshot(BaseModel):
    """Projection of the session state read by navigation guards."""

    model_config = ConfigDict(frozen=True)

    authenticated: bool
    restoring: bool


# ==================== Wire Models ====================


class SignInResponse(BaseModel):
    """Body returned by ``GET /auth/sign-in``."""

    access_token: str = Field(..., validation_alias="accessToken")
    # Some service builds spell the field "refreshTokem"
    refresh_token: str = Field(
        ..., validation_alias=AliasChoices("refreshToken", "refreshTokem")
    )
    expiration_time: datetime | None = Field(
        None, validation_alias=AliasChoices("expirationTime", "expirationDate")
    )


class RefreshResponse(BaseModel):
    """Body returned by ``GET /auth/token/refresh``."""

    access_token: str = Field(..., validation_alias="accessToken")
    expiration_time: datetime | None = Field(
        None, validation_alias=AliasChoices("expirationDate", "expirationTime")
    )


class SignUpRequest(BaseModel):
    """Body sent to ``POST /auth/sign-up``."""

    email: str
    password: str
