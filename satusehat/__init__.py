"""
Async client SDK for the SATUSEHAT FHIR R4 API.
"""

from satusehat.auth.token_manager import TokenManager
from satusehat.client import SatusehatClient
from satusehat.config.environment import BASE_URLS, Environment
from satusehat.errors import (
    AuthenticationError,
    ConfigurationError,
    FHIRResourceError,
    MissingConfigurationError,
    OperationOutcomeError,
    RequestError,
    SatusehatError,
    TransportError,
    UnknownResourceTypeError,
)
from satusehat.http import HTTPResponse, HTTPTransport
from satusehat.models import (
    Address,
    Bundle,
    BundleEntry,
    BundleLink,
    ContactPoint,
    FHIRResource,
    Identifier,
    Meta,
    OperationOutcome,
    Organization,
    PatchOperation,
    Telecom,
    TokenResponse,
    TokenState,
)
from satusehat.services import OrganizationService, ResourceRequestBuilder

__version__ = "0.1.0"

__all__ = [
    "SatusehatClient",
    "TokenManager",
    "ResourceRequestBuilder",
    "OrganizationService",
    "HTTPTransport",
    "HTTPResponse",
    "BASE_URLS",
    "Environment",
    "SatusehatError",
    "AuthenticationError",
    "ConfigurationError",
    "MissingConfigurationError",
    "FHIRResourceError",
    "OperationOutcomeError",
    "RequestError",
    "TransportError",
    "UnknownResourceTypeError",
    "Address",
    "Bundle",
    "BundleEntry",
    "BundleLink",
    "ContactPoint",
    "FHIRResource",
    "Identifier",
    "Meta",
    "OperationOutcome",
    "Organization",
    "PatchOperation",
    "Telecom",
    "TokenResponse",
    "TokenState",
]
