"""
Generic FHIR resource request builder.

This module translates resource operations for one resource type into
authenticated HTTP calls and decodes both success and error responses.
"""

import json
from collections.abc import Mapping, Sequence
from typing import Any, NoReturn, Union
from urllib.parse import quote, urlencode

from pydantic import ValidationError

from satusehat.audit import AuditEvent, audit_log
from satusehat.auth.token_manager import TokenManager
from satusehat.config.logging import get_logger
from satusehat.constants import (
    FHIR_ACCEPT,
    JSON_CONTENT_TYPE,
    JSON_PATCH_CONTENT_TYPE,
    OPERATION_OUTCOME_RESOURCE_TYPE,
)
from satusehat.errors import OperationOutcomeError, RequestError, TransportError
from satusehat.http import HTTPResponse, HTTPTransport
from satusehat.models.fhir import (
    Bundle,
    FHIRElement,
    FHIRResource,
    OperationOutcome,
    OperationOutcomeIssue,
    PatchOperation,
)
from satusehat.models.resources import get_resource_model, validate_resource_type

logger = get_logger(__name__)

QueryValue = Union[str, int, float, bool]
QueryParams = Mapping[str, Union[QueryValue, Sequence[QueryValue]]]
ResourceBody = Union[FHIRResource, Mapping[str, Any]]


def _format_query_value(value: QueryValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(query_params: QueryParams) -> str:
    """
    Encode search parameters as a query string.

    List values repeat the parameter once per element, in order.
    """
    pairs: list[tuple[str, str]] = []
    for key, value in query_params.items():
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _format_query_value(v)) for v in value)
        else:
            pairs.append((key, _format_query_value(value)))
    return urlencode(pairs)


def parse_operation_outcome(body: str) -> OperationOutcome | None:
    """
    Decode an error body as an OperationOutcome.

    The resourceType alone decides. An OperationOutcome whose issues do not
    fit the model is still returned, with unusable issues left empty.

    Returns:
        The OperationOutcome, or None if the body is not JSON or is not
        an OperationOutcome
    """
    try:
        data = json.loads(body)
    except ValueError:
        return None

    if not isinstance(data, dict) or data.get("resourceType") != OPERATION_OUTCOME_RESOURCE_TYPE:
        return None

    try:
        return OperationOutcome.model_validate(data)
    except ValidationError:
        return _lenient_operation_outcome(data)


def _lenient_operation_outcome(data: dict[str, Any]) -> OperationOutcome:
    raw_issues = data.get("issue")
    if not isinstance(raw_issues, list):
        raw_issues = []

    issues = []
    for raw in raw_issues:
        try:
            issues.append(OperationOutcomeIssue.model_validate(raw))
        except ValidationError:
            # Keep the position so only the server's first issue is ever used
            issues.append(OperationOutcomeIssue())
    return OperationOutcome(issue=issues)


def serialize_resource(body: ResourceBody) -> dict[str, Any]:
    """Convert a resource model or mapping into a JSON-ready dict."""
    if isinstance(body, FHIRElement):
        return body.to_fhir()
    return dict(body)


class ResourceRequestBuilder:
    """
    Request builder for a single FHIR resource type.

    Provides read, create, replace and patch. Every request carries a
    bearer token from the shared TokenManager.
    """

    def __init__(
        self,
        token_manager: TokenManager,
        base_url: str,
        resource_type: str,
        transport: HTTPTransport | None = None,
    ):
        """
        Initialize the builder.

        Args:
            token_manager: Shared token manager
            base_url: FHIR base URL
            resource_type: FHIR resource type (e.g., "Patient")
            transport: HTTP transport (a per-request aiohttp session by default)

        Raises:
            UnknownResourceTypeError: If resource_type is not a FHIR R4 resource
        """
        self._token_manager = token_manager
        self.base_url = base_url.rstrip("/")
        self.resource_type = validate_resource_type(resource_type)
        self._transport = transport or HTTPTransport()
        self._model = get_resource_model(resource_type)

    def build_url(
        self,
        resource_id: str | None = None,
        query_params: QueryParams | None = None,
    ) -> str:
        """
        Build the request URL.

        Args:
            resource_id: Optional resource ID, percent-encoded into the path
            query_params: Optional search parameters

        Returns:
            {base_url}/{resource_type}[/{id}][?query]
        """
        url = f"{self.base_url}/{self.resource_type}"

        if resource_id:
            url += f"/{quote(str(resource_id), safe='')}"

        query = build_query_string(query_params) if query_params else ""
        if query:
            url += f"?{query}"

        return url

    async def read(
        self,
        resource_id: str | None = None,
        query_params: QueryParams | None = None,
    ) -> FHIRResource | Bundle | None:
        """
        Read a resource by ID, or search when no ID is given.

        Args:
            resource_id: Resource ID; omit to search
            query_params: Search parameters

        Returns:
            The resource when resource_id is given, otherwise a search Bundle
        """
        url = self.build_url(resource_id, query_params)
        response = await self._send("GET", url)

        if resource_id:
            resource = self._decode("GET", response, self._model)
            self._audit(AuditEvent.RESOURCE_READ, response, resource_id=resource_id)
            return resource

        bundle = self._decode("GET", response, Bundle)
        self._audit(
            AuditEvent.RESOURCE_SEARCH,
            response,
            details={
                "query_params": dict(query_params) if query_params else {},
                "total": bundle.total if bundle is not None else None,
            },
        )
        return bundle

    async def create(self, body: ResourceBody) -> FHIRResource | None:
        """
        Create a resource; the server assigns its ID.

        Args:
            body: Resource to create

        Returns:
            The created resource as returned by the server
        """
        response = await self._send("POST", self.build_url(), payload=serialize_resource(body))
        resource = self._decode("POST", response, self._model)
        self._audit(AuditEvent.RESOURCE_CREATE, response, resource=resource)
        return resource

    async def replace(self, resource_id: str, body: ResourceBody) -> FHIRResource | None:
        """
        Replace a resource (PUT).

        Args:
            resource_id: ID of the resource to replace
            body: Full replacement resource

        Returns:
            The updated resource
        """
        if not resource_id:
            raise ValueError("resource_id is required for PUT")

        url = self.build_url(resource_id)
        response = await self._send("PUT", url, payload=serialize_resource(body))
        resource = self._decode("PUT", response, self._model)
        self._audit(
            AuditEvent.RESOURCE_UPDATE, response, resource_id=resource_id, resource=resource
        )
        return resource

    async def patch(
        self,
        resource_id: str,
        operations: Sequence[PatchOperation | Mapping[str, Any]],
    ) -> FHIRResource | None:
        """
        Partially update a resource with JSON Patch operations.

        Args:
            resource_id: ID of the resource to patch
            operations: Ordered JSON Patch operations

        Returns:
            The patched resource
        """
        if not resource_id:
            raise ValueError("resource_id is required for PATCH")

        payload = [
            (op if isinstance(op, PatchOperation) else PatchOperation.model_validate(op))
            .to_json_patch()
            for op in operations
        ]

        url = self.build_url(resource_id)
        response = await self._send(
            "PATCH", url, payload=payload, content_type=JSON_PATCH_CONTENT_TYPE
        )
        resource = self._decode("PATCH", response, self._model)
        self._audit(
            AuditEvent.RESOURCE_PATCH,
            response,
            resource_id=resource_id,
            details={"operations": [op["op"] for op in payload]},
        )
        return resource

    async def _send(
        self,
        method: str,
        url: str,
        payload: Any = None,
        content_type: str = JSON_CONTENT_TYPE,
    ) -> HTTPResponse:
        """Send an authenticated request; raise on any non-2xx status."""
        token = await self._token_manager.get_valid_token()

        headers = {
            "Authorization": f"Bearer {token}",
            "Content-Type": content_type,
            "Accept": FHIR_ACCEPT,
        }
        data = json.dumps(payload) if payload is not None else None

        logger.debug("FHIR request", method=method, url=url)

        try:
            response = await self._transport.request(method, url, headers=headers, data=data)
        except TransportError as e:
            audit_log(
                AuditEvent.RESOURCE_ACCESS_ERROR,
                resource_type=self.resource_type,
                success=False,
                error=e.message,
            )
            raise RequestError(method, self.resource_type, None, e.message) from e

        if not response.ok:
            self._raise_for_error(method, response)

        return response

    def _raise_for_error(self, method: str, response: HTTPResponse) -> NoReturn:
        outcome = parse_operation_outcome(response.body)

        audit_log(
            AuditEvent.RESOURCE_ACCESS_ERROR,
            resource_type=self.resource_type,
            status=response.status,
            success=False,
            error=response.body[:200],
            details={"method": method},
        )
        logger.warning(
            "FHIR request failed",
            method=method,
            resource_type=self.resource_type,
            status_code=response.status,
            operation_outcome=outcome is not None,
        )

        if outcome is not None:
            raise OperationOutcomeError(outcome, response.status)
        raise RequestError(method, self.resource_type, response.status, response.body)

    def _decode(
        self,
        method: str,
        response: HTTPResponse,
        model: type[FHIRResource],
    ) -> Any:
        """Decode a success body with the given model; an empty body decodes to None."""
        if not response.body.strip():
            return None

        try:
            return model.model_validate(response.json())
        except ValueError as e:
            # pydantic's ValidationError is a ValueError
            raise RequestError(
                method,
                self.resource_type,
                response.status,
                f"Invalid response body: {response.body[:200]}",
            ) from e

    def _audit(
        self,
        event: str,
        response: HTTPResponse,
        resource_id: str | None = None,
        resource: FHIRResource | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        if resource_id is None and resource is not None:
            resource_id = resource.id
        audit_log(
            event,
            resource_type=self.resource_type,
            resource_id=resource_id,
            status=response.status,
            details=details,
            new_state=resource.to_fhir() if resource is not None else None,
        )
