"""
Client constants.

These values are intentionally not configurable via environment variables.
"""

# Token/auth
TOKEN_EXPIRY_BUFFER_SECONDS = 60  # Refresh this many seconds before expiry
TOKEN_ENDPOINT_PATH = "accesstoken"
CLIENT_CREDENTIALS_GRANT = "client_credentials"

# Request settings
REQUEST_TIMEOUT_SECONDS = 30

# Content types
JSON_CONTENT_TYPE = "application/json"
JSON_PATCH_CONTENT_TYPE = "application/json-patch+json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
FHIR_ACCEPT = "application/fhir+json, application/json"

# FHIR
OPERATION_OUTCOME_RESOURCE_TYPE = "OperationOutcome"
DEFAULT_OPERATION_OUTCOME_MESSAGE = "FHIR OperationOutcome error"
