"""
Pydantic models for the SATUSEHAT client.

This module contains models for:
- OAuth client credentials and tokens
- FHIR resources, Bundles, OperationOutcomes and JSON Patch operations
- The Organization resource
"""

from satusehat.models.auth import (
    Credentials,
    TokenResponse,
    TokenState,
)
from satusehat.models.fhir import (
    Bundle,
    BundleEntry,
    BundleLink,
    FHIRResource,
    Meta,
    OperationOutcome,
    OperationOutcomeIssue,
    PatchOperation,
)
from satusehat.models.organization import (
    Address,
    ContactPoint,
    Identifier,
    Organization,
    Telecom,
)
from satusehat.models.resources import (
    RESOURCE_TYPES,
    decode_resource,
    get_resource_model,
    register_resource_model,
)

__all__ = [
    "Credentials",
    "TokenResponse",
    "TokenState",
    "Bundle",
    "BundleEntry",
    "BundleLink",
    "FHIRResource",
    "Meta",
    "OperationOutcome",
    "OperationOutcomeIssue",
    "PatchOperation",
    "Address",
    "ContactPoint",
    "Identifier",
    "Organization",
    "Telecom",
    "RESOURCE_TYPES",
    "decode_resource",
    "get_resource_model",
    "register_resource_model",
]
