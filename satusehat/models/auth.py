"""
Pydantic models for client-credentials authentication.
"""

import time

from pydantic import BaseModel, ConfigDict, SecretStr

from satusehat.constants import TOKEN_EXPIRY_BUFFER_SECONDS


def current_time_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


class Credentials(BaseModel):
    """OAuth client credentials and the endpoint they are presented to."""

    model_config = ConfigDict(frozen=True)

    client_id: str
    client_secret: SecretStr
    auth_url: str


class TokenResponse(BaseModel):
    """
    Token endpoint success body.

    SATUSEHAT sends expires_in (seconds) and issued_at (epoch milliseconds)
    as decimal strings; both are coerced to int.
    """

    model_config = ConfigDict(extra="ignore")

    access_token: str
    expires_in: int
    issued_at: int
    token_type: str | None = None

    @property
    def expires_at(self) -> int:
        """Absolute expiry in epoch milliseconds."""
        return self.issued_at + self.expires_in * 1000


class TokenState(BaseModel):
    """The cached access token and its absolute expiry."""

    model_config = ConfigDict(frozen=True)

    access_token: str
    expires_at: int  # epoch milliseconds

    @classmethod
    def from_response(cls, response: TokenResponse) -> "TokenState":
        return cls(access_token=response.access_token, expires_at=response.expires_at)

    def ms_until_expiry(self, now_ms: int | None = None) -> int:
        """Get milliseconds remaining until the token expires."""
        if now_ms is None:
            now_ms = current_time_ms()
        return self.expires_at - now_ms

    def is_valid(
        self,
        buffer_seconds: int = TOKEN_EXPIRY_BUFFER_SECONDS,
        now_ms: int | None = None,
    ) -> bool:
        """Check the token is usable for at least buffer_seconds more."""
        return self.ms_until_expiry(now_ms) > buffer_seconds * 1000

    def __repr__(self) -> str:
        return f"TokenState(access_token='***', expires_at={self.expires_at})"
