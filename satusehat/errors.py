"""
Custom error types for the SATUSEHAT client.

Callers distinguish failures by type: authentication against the token
endpoint, structured OperationOutcome errors from the FHIR endpoint, and
generic request failures carrying the raw response body.
"""

from typing import TYPE_CHECKING, Any

from satusehat.constants import DEFAULT_OPERATION_OUTCOME_MESSAGE

if TYPE_CHECKING:
    from satusehat.models.fhir import OperationOutcome


class SatusehatError(Exception):
    """Base exception for all SATUSEHAT client errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


# Authentication Errors


class AuthenticationError(SatusehatError):
    """Raised when the token endpoint rejects the client credentials."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        body: str | None = None,
    ):
        self.status = status
        self.body = body
        super().__init__(message, details={"status": status, "body": body})


# Transport Errors


class TransportError(SatusehatError):
    """Raised when an HTTP request fails before a response is received."""

    def __init__(self, method: str, url: str, original_error: str | None = None):
        self.method = method
        self.url = url
        self.original_error = original_error
        message = f"{method} {url} failed"
        if original_error:
            message += f": {original_error}"
        super().__init__(
            message,
            details={"method": method, "url": url, "original_error": original_error},
        )


# FHIR Resource Errors


class FHIRResourceError(SatusehatError):
    """Base exception for FHIR resource request errors."""

    pass


class OperationOutcomeError(FHIRResourceError):
    """Raised when the FHIR endpoint answers with an OperationOutcome error body."""

    def __init__(self, operation_outcome: "OperationOutcome", status: int):
        self.operation_outcome = operation_outcome
        self.status = status
        message = operation_outcome.first_message()
        if message is None:
            message = DEFAULT_OPERATION_OUTCOME_MESSAGE
        super().__init__(
            message,
            details={
                "status": status,
                "operation_outcome": operation_outcome.to_fhir(),
            },
        )

    @property
    def issues(self) -> list:
        """Issues reported by the server."""
        return self.operation_outcome.issue


class RequestError(FHIRResourceError):
    """Raised for a failed FHIR request without a recognized OperationOutcome body."""

    def __init__(
        self,
        method: str,
        resource_type: str,
        status: int | None,
        body: str,
    ):
        self.method = method
        self.resource_type = resource_type
        self.status = status
        self.body = body
        if status is None:
            message = f"FHIR {method} {resource_type} failed: {body}"
        else:
            message = f"FHIR {method} {resource_type} failed: {status} {body}"
        super().__init__(
            message,
            details={
                "method": method,
                "resource_type": resource_type,
                "status": status,
                "body": body,
            },
        )


class UnknownResourceTypeError(FHIRResourceError, ValueError):
    """Raised when a resource type is not a FHIR R4 resource."""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(
            f"Unknown FHIR R4 resource type: {resource_type}",
            details={"resource_type": resource_type},
        )


# Configuration Errors


class ConfigurationError(SatusehatError):
    """Raised when there's a configuration error."""

    pass


class MissingConfigurationError(ConfigurationError):
    """Raised when required configuration is missing."""

    def __init__(self, config_key: str, description: str | None = None):
        self.config_key = config_key
        message = f"Missing required configuration: {config_key}"
        if description:
            message += f". {description}"
        super().__init__(
            message,
            details={"config_key": config_key, "description": description},
        )
