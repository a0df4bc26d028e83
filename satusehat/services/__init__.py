"""
Service layer for the SATUSEHAT client.

Contains the generic FHIR request builder and per-resource services.
"""

from satusehat.services.fhir_client import (
    ResourceRequestBuilder,
    build_query_string,
    parse_operation_outcome,
)
from satusehat.services.organization import OrganizationService

__all__ = [
    "ResourceRequestBuilder",
    "build_query_string",
    "parse_operation_outcome",
    "OrganizationService",
]
