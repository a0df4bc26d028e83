"""
Main client for the SATUSEHAT FHIR R4 API.

Example:
    client = SatusehatClient(
        client_id="your-client-id",
        client_secret="your-client-secret",
        environment="development",
    )

    org = await client.organization.by_id("uuid-here")
    results = await client.organization.by_name("RS Sehat")

    patient = await client.fhir("Patient").read("123")
    bundle = await client.fhir("Patient").read(query_params={"name": "John"})
"""

import aiohttp
from pydantic import SecretStr

from satusehat.auth.token_manager import TokenManager
from satusehat.config.environment import Environment, get_base_urls
from satusehat.config.logging import get_logger
from satusehat.config.settings import Settings, get_settings
from satusehat.errors import MissingConfigurationError
from satusehat.http import HTTPTransport
from satusehat.services.fhir_client import ResourceRequestBuilder
from satusehat.services.organization import OrganizationService

logger = get_logger(__name__)


class SatusehatClient:
    """
    Client for the SATUSEHAT FHIR API.

    One client owns one TokenManager; every resource builder it hands out
    shares that manager and its cached token.
    """

    def __init__(
        self,
        client_id: str,
        client_secret: str | SecretStr,
        environment: Environment | str = Environment.DEVELOPMENT,
        session: aiohttp.ClientSession | None = None,
        timeout: float | None = None,
    ):
        """
        Initialize the client.

        Args:
            client_id: OAuth client ID issued by SATUSEHAT
            client_secret: OAuth client secret issued by SATUSEHAT
            environment: "development" (staging) or "production"
            session: Optional caller-owned aiohttp session
            timeout: Request timeout in seconds
        """
        urls = get_base_urls(environment)

        self.environment = Environment(environment)
        self.fhir_base_url = urls.fhir
        self._transport = HTTPTransport(session=session, timeout=timeout)
        self._token_manager = TokenManager(
            client_id=client_id,
            client_secret=client_secret,
            auth_url=urls.auth,
            transport=self._transport,
        )

        self.organization = OrganizationService(
            self._token_manager, self.fhir_base_url, transport=self._transport
        )

        logger.debug(
            "SATUSEHAT client created",
            environment=self.environment.value,
            fhir_base_url=self.fhir_base_url,
        )

    @classmethod
    def from_settings(
        cls,
        settings: Settings | None = None,
        session: aiohttp.ClientSession | None = None,
    ) -> "SatusehatClient":
        """
        Create a client from SATUSEHAT_* environment settings.

        Raises:
            MissingConfigurationError: If the client ID or secret is not set
        """
        settings = settings or get_settings()

        if not settings.client_id:
            raise MissingConfigurationError(
                "SATUSEHAT_CLIENT_ID", "Set the OAuth client ID issued by SATUSEHAT"
            )
        if settings.client_secret is None or not settings.client_secret.get_secret_value():
            raise MissingConfigurationError(
                "SATUSEHAT_CLIENT_SECRET", "Set the OAuth client secret issued by SATUSEHAT"
            )

        return cls(
            client_id=settings.client_id,
            client_secret=settings.client_secret,
            environment=settings.environment,
            session=session,
            timeout=settings.request_timeout,
        )

    @property
    def token_manager(self) -> TokenManager:
        return self._token_manager

    def fhir(self, resource_type: str) -> ResourceRequestBuilder:
        """
        Access any FHIR resource type.

        Args:
            resource_type: FHIR resource name (e.g., "Patient", "Encounter", "Observation")

        Returns:
            ResourceRequestBuilder with read, create, replace and patch

        Raises:
            UnknownResourceTypeError: If resource_type is not a FHIR R4 resource
        """
        return ResourceRequestBuilder(
            self._token_manager,
            self.fhir_base_url,
            resource_type,
            transport=self._transport,
        )

    async def get_access_token(self) -> str:
        """Get the current access token, fetching or refreshing it if needed."""
        return await self._token_manager.get_valid_token()

    def clear_token(self) -> None:
        """Drop the cached access token so the next request fetches a new one."""
        self._token_manager.clear_token()
