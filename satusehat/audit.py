"""
Audit logging for token and resource operations.

Provides structured audit events for token fetches and for every FHIR
request the client issues, with resource payloads sanitized.
"""

import logging
from typing import Any

import structlog

# Create dedicated audit logger
_audit_logger = structlog.wrap_logger(
    logging.getLogger("satusehat.audit"),
    wrapper_class=structlog.stdlib.BoundLogger,
)


class AuditEvent:
    """Constants for audit event types."""

    # Token events
    TOKEN_FETCH = "token.fetch"
    TOKEN_FETCH_FAILURE = "token.fetch_failure"
    TOKEN_CLEAR = "token.clear"

    # Resource access events
    RESOURCE_READ = "resource.read"
    RESOURCE_SEARCH = "resource.search"
    RESOURCE_CREATE = "resource.create"
    RESOURCE_UPDATE = "resource.update"
    RESOURCE_PATCH = "resource.patch"

    # Error events
    RESOURCE_ACCESS_ERROR = "error.resource_access"


# Fields excluded from audit logs
_SENSITIVE_FIELDS = {
    "data",  # Binary.data
    "content",  # DocumentReference.content
    "attachment",
    "photo",  # Patient.photo, Practitioner.photo
    "text",  # Resource.text narrative
}

_MAX_STRING_LENGTH = 500
_MAX_LIST_ITEMS = 10


def sanitize_resource_for_audit(resource: dict[str, Any] | None) -> dict[str, Any]:
    """
    Sanitize a FHIR resource for audit logging.

    Redacts binary, attachment and narrative fields and truncates long
    strings and lists.

    Args:
        resource: FHIR resource dict

    Returns:
        Sanitized copy of the resource
    """
    if not resource:
        return {}

    def sanitize_value(value: Any, key: str = "") -> Any:
        if key.lower() in _SENSITIVE_FIELDS:
            return "[REDACTED]"
        if isinstance(value, str):
            if len(value) > _MAX_STRING_LENGTH:
                return (
                    value[:_MAX_STRING_LENGTH]
                    + f"...[truncated {len(value) - _MAX_STRING_LENGTH} chars]"
                )
            return value
        if isinstance(value, dict):
            return {k: sanitize_value(v, k) for k, v in value.items()}
        if isinstance(value, list):
            if len(value) > _MAX_LIST_ITEMS:
                return [sanitize_value(item) for item in value[:_MAX_LIST_ITEMS]] + [
                    f"...[{len(value) - _MAX_LIST_ITEMS} more items]"
                ]
            return [sanitize_value(item) for item in value]
        return value

    return sanitize_value(resource)


def audit_log(
    event: str,
    *,
    client_id: str | None = None,
    resource_type: str | None = None,
    resource_id: str | None = None,
    status: int | None = None,
    success: bool = True,
    error: str | None = None,
    details: dict[str, Any] | None = None,
    new_state: dict[str, Any] | None = None,
) -> None:
    """
    Log an audit event.

    Args:
        event: Event type from AuditEvent constants
        client_id: Optional OAuth client identifier
        resource_type: Optional FHIR resource type
        resource_id: Optional resource ID
        status: Optional HTTP status code
        success: Whether the operation succeeded
        error: Optional error message if failed
        details: Optional additional details
        new_state: Resource state sent or received (create/update tracking)
    """
    log_data: dict[str, Any] = {
        "audit_event": event,
        "success": success,
    }

    if client_id:
        log_data["client_id"] = client_id
    if resource_type:
        log_data["resource_type"] = resource_type
    if resource_id:
        log_data["resource_id"] = resource_id
    if status is not None:
        log_data["status"] = status
    if error:
        log_data["error"] = error
    if details:
        log_data["details"] = details
    if new_state:
        log_data["new_state"] = sanitize_resource_for_audit(new_state)

    if success:
        _audit_logger.info(event, **log_data)
    else:
        _audit_logger.warning(event, **log_data)
