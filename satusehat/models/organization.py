"""
Pydantic models for the FHIR Organization resource.
"""

from typing import Any

from satusehat.models.fhir import FHIRElement, FHIRResource


class Identifier(FHIRElement):
    use: str | None = None
    system: str | None = None
    value: str | None = None


class ContactPoint(FHIRElement):
    """Phone, email or URL contact (FHIR ContactPoint)."""

    system: str | None = None
    value: str | None = None
    use: str | None = None


# Alias kept for the telecom field naming used across SATUSEHAT docs
Telecom = ContactPoint


class Address(FHIRElement):
    use: str | None = None
    type: str | None = None
    text: str | None = None
    line: list[str] | None = None
    city: str | None = None
    district: str | None = None
    state: str | None = None
    postalCode: str | None = None
    country: str | None = None
    extension: list[dict[str, Any]] | None = None


class Organization(FHIRResource):
    """FHIR Organization resource."""

    resourceType: str = "Organization"
    active: bool | None = None
    identifier: list[Identifier] | None = None
    type: list[dict[str, Any]] | None = None
    name: str | None = None
    alias: list[str] | None = None
    telecom: list[ContactPoint] | None = None
    address: list[Address] | None = None
    partOf: dict[str, Any] | None = None
