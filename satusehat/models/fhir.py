"""
Pydantic models for FHIR R4 payloads.

Models keep every field the server sends (extra="allow") so that a
resource read from the API can be written back without loss.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from satusehat.constants import OPERATION_OUTCOME_RESOURCE_TYPE


class FHIRElement(BaseModel):
    """Base for FHIR complex types."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def to_fhir(self) -> dict[str, Any]:
        """Serialize to a JSON-ready dict using FHIR field names."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Meta(FHIRElement):
    """Resource metadata maintained by the server."""

    versionId: str | None = None
    lastUpdated: str | None = None
    profile: list[str] | None = None


class FHIRResource(FHIRElement):
    """A FHIR resource of any kind."""

    resourceType: str
    id: str | None = None
    meta: Meta | None = None


class BundleLink(FHIRElement):
    """A pagination or self link in a Bundle."""

    relation: str
    url: str


class BundleEntry(FHIRElement):
    """A single entry in a FHIR Bundle."""

    fullUrl: str | None = None
    resource: dict[str, Any] | None = None
    search: dict[str, Any] | None = None


class Bundle(FHIRResource):
    """FHIR Bundle returned by searches."""

    resourceType: str = "Bundle"
    type: str | None = None
    total: int | None = None
    entry: list[BundleEntry] = Field(default_factory=list)
    link: list[BundleLink] = Field(default_factory=list)

    def resources(self) -> list[FHIRResource]:
        """Decode entry resources into their registered models."""
        from satusehat.models.resources import decode_resource

        return [decode_resource(e.resource) for e in self.entry if e.resource is not None]

    def link_url(self, relation: str) -> str | None:
        """Get the URL of the link with the given relation (e.g. "next")."""
        for link in self.link:
            if link.relation == relation:
                return link.url
        return None


class IssueDetails(FHIRElement):
    """CodeableConcept attached to an OperationOutcome issue."""

    text: str | None = None
    coding: list[dict[str, Any]] | None = None


class OperationOutcomeIssue(FHIRElement):
    """A single issue in an OperationOutcome."""

    severity: str | None = None
    code: str | None = None
    diagnostics: str | None = None
    details: IssueDetails | None = None


class OperationOutcome(FHIRResource):
    """FHIR OperationOutcome for error responses."""

    resourceType: str = OPERATION_OUTCOME_RESOURCE_TYPE
    issue: list[OperationOutcomeIssue] = Field(default_factory=list)

    def first_message(self) -> str | None:
        """Diagnostics of the first issue, else its details text. Empty strings count."""
        if not self.issue:
            return None
        first = self.issue[0]
        if first.diagnostics is not None:
            return first.diagnostics
        if first.details is not None:
            return first.details.text
        return None


PatchOp = Literal["add", "remove", "replace", "move", "copy", "test"]


class PatchOperation(BaseModel):
    """One JSON Patch (RFC 6902) operation."""

    model_config = ConfigDict(populate_by_name=True)

    op: PatchOp
    path: str
    value: Any = None
    from_: str | None = Field(default=None, alias="from")

    def to_json_patch(self) -> dict[str, Any]:
        """Serialize, omitting fields that were never set."""
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)
