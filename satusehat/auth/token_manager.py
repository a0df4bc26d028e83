"""
Access token manager for the SATUSEHAT client.

Provides client-credentials token management with:
- A single cached token reused until shortly before expiry
- Lazy refresh triggered by the request that finds the token stale
- Single-flight refresh shared by concurrent callers
"""

import asyncio
import time

from pydantic import SecretStr, ValidationError

from satusehat.audit import AuditEvent, audit_log
from satusehat.config.logging import get_logger
from satusehat.constants import (
    CLIENT_CREDENTIALS_GRANT,
    FORM_CONTENT_TYPE,
    TOKEN_ENDPOINT_PATH,
    TOKEN_EXPIRY_BUFFER_SECONDS,
)
from satusehat.errors import AuthenticationError, TransportError
from satusehat.http import HTTPTransport
from satusehat.models.auth import Credentials, TokenResponse, TokenState

logger = get_logger(__name__)


class TokenManager:
    """
    Client-credentials token manager.

    Owns the credentials and at most one TokenState. Every caller of
    get_valid_token() receives a token valid for at least
    buffer_seconds more.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str | SecretStr,
        auth_url: str,
        transport: HTTPTransport | None = None,
        buffer_seconds: int = TOKEN_EXPIRY_BUFFER_SECONDS,
    ):
        """
        Initialize token manager.

        Args:
            client_id: OAuth client ID
            client_secret: OAuth client secret
            auth_url: Base URL of the OAuth endpoint
            transport: HTTP transport (a per-request aiohttp session by default)
            buffer_seconds: Refresh this many seconds before expiry
        """
        self._credentials = Credentials(
            client_id=client_id,
            client_secret=client_secret,
            auth_url=auth_url.rstrip("/"),
        )
        self._transport = transport or HTTPTransport()
        self._buffer_seconds = buffer_seconds
        self._token_state: TokenState | None = None
        self._pending_refresh: asyncio.Future[TokenState] | None = None

    @property
    def client_id(self) -> str:
        return self._credentials.client_id

    @property
    def token_url(self) -> str:
        return (
            f"{self._credentials.auth_url}/{TOKEN_ENDPOINT_PATH}"
            f"?grant_type={CLIENT_CREDENTIALS_GRANT}"
        )

    @property
    def token_state(self) -> TokenState | None:
        """The cached token, or None if none has been fetched or it was cleared."""
        return self._token_state

    def _is_token_valid(self) -> bool:
        if self._token_state is None:
            return False
        now_ms = int(time.time() * 1000)
        return self._token_state.is_valid(self._buffer_seconds, now_ms)

    async def get_valid_token(self) -> str:
        """
        Get a valid access token, fetching a new one if needed.

        Concurrent callers that find the token stale wait on the same
        fetch instead of issuing their own.

        Returns:
            Bearer access token

        Raises:
            AuthenticationError: If the token endpoint rejects the request
        """
        if self._is_token_valid():
            return self._token_state.access_token

        if self._pending_refresh is None:
            refresh = asyncio.ensure_future(self._fetch_token())
            refresh.add_done_callback(self._refresh_done)
            self._pending_refresh = refresh

        # Shield so a cancelled caller does not cancel the shared fetch
        state = await asyncio.shield(self._pending_refresh)
        return state.access_token

    def _refresh_done(self, refresh: "asyncio.Future[TokenState]") -> None:
        if self._pending_refresh is refresh:
            self._pending_refresh = None
        # Mark the exception retrieved when every waiter was cancelled
        if not refresh.cancelled():
            refresh.exception()

    async def _fetch_token(self) -> TokenState:
        """Request a new access token and store it."""
        credentials = self._credentials
        logger.debug("Fetching access token", client_id=credentials.client_id)

        try:
            response = await self._transport.request(
                "POST",
                self.token_url,
                headers={"Content-Type": FORM_CONTENT_TYPE},
                data={
                    "client_id": credentials.client_id,
                    "client_secret": credentials.client_secret.get_secret_value(),
                },
            )
        except TransportError as e:
            self._log_failure(None, e.message)
            raise AuthenticationError(
                f"Failed to fetch access token: {e.message}"
            ) from e

        if not response.ok:
            self._log_failure(response.status, response.body)
            raise AuthenticationError(
                f"Failed to fetch access token: {response.status} {response.body}",
                status=response.status,
                body=response.body,
            )

        try:
            token_response = TokenResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            self._log_failure(response.status, "invalid token response")
            raise AuthenticationError(
                "Token endpoint returned an invalid response",
                status=response.status,
                body=response.body,
            ) from e

        self._token_state = TokenState.from_response(token_response)

        audit_log(
            AuditEvent.TOKEN_FETCH,
            client_id=credentials.client_id,
            details={"expires_at": self._token_state.expires_at},
        )
        logger.info(
            "Access token fetched",
            client_id=credentials.client_id,
            expires_in=token_response.expires_in,
        )

        return self._token_state

    def _log_failure(self, status: int | None, error: str) -> None:
        audit_log(
            AuditEvent.TOKEN_FETCH_FAILURE,
            client_id=self._credentials.client_id,
            status=status,
            success=False,
            error=error[:200],
        )
        logger.error(
            "Access token fetch failed",
            client_id=self._credentials.client_id,
            status_code=status,
            error=error[:200],
        )

    def clear_token(self) -> None:
        """Discard the cached token; the next get_valid_token() fetches a new one."""
        self._token_state = None
        audit_log(AuditEvent.TOKEN_CLEAR, client_id=self._credentials.client_id)
