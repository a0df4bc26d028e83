"""
Organization resource service.

Thin helpers over the generic request builder fixed to Organization.
"""

from satusehat.auth.token_manager import TokenManager
from satusehat.http import HTTPTransport
from satusehat.models.fhir import Bundle
from satusehat.models.organization import Organization
from satusehat.services.fhir_client import ResourceRequestBuilder


class OrganizationService:
    """Operations on the FHIR Organization resource."""

    resource_type = "Organization"

    def __init__(
        self,
        token_manager: TokenManager,
        base_url: str,
        transport: HTTPTransport | None = None,
    ):
        self.fhir = ResourceRequestBuilder(
            token_manager, base_url, self.resource_type, transport=transport
        )

    async def by_id(self, organization_id: str) -> Organization:
        """
        Get an organization by its ID.

        Args:
            organization_id: Organization resource ID

        Returns:
            Organization resource
        """
        if not organization_id:
            raise ValueError("organization_id is required")
        return await self.fhir.read(organization_id)

    async def by_name(self, name: str) -> Bundle:
        """
        Search organizations by name.

        Args:
            name: Name to search for

        Returns:
            Bundle of matching organizations
        """
        return await self.fhir.read(query_params={"name": name})
