"""
SATUSEHAT environments and their fixed base URLs.
"""

from dataclasses import dataclass
from enum import Enum


class Environment(str, Enum):
    """Supported SATUSEHAT environments."""

    DEVELOPMENT = "development"
    PRODUCTION = "production"


@dataclass(frozen=True)
class EnvironmentURLs:
    """Auth and FHIR base URLs for one environment."""

    auth: str
    fhir: str


BASE_URLS: dict[Environment, EnvironmentURLs] = {
    Environment.DEVELOPMENT: EnvironmentURLs(
        auth="https://api-satusehat-stg.dto.kemkes.go.id/oauth2/v1",
        fhir="https://api-satusehat-stg.dto.kemkes.go.id/fhir-r4/v1",
    ),
    Environment.PRODUCTION: EnvironmentURLs(
        auth="https://api-satusehat.kemkes.go.id/oauth2/v1",
        fhir="https://api-satusehat.kemkes.go.id/fhir-r4/v1",
    ),
}


def get_base_urls(environment: Environment | str) -> EnvironmentURLs:
    """
    Get the base URLs for an environment.

    Args:
        environment: Environment enum member or its value ("development", "production")

    Returns:
        EnvironmentURLs for the environment

    Raises:
        ValueError: If the environment is not supported
    """
    try:
        env = Environment(environment)
    except ValueError:
        supported = ", ".join(e.value for e in Environment)
        raise ValueError(
            f"Unsupported environment '{environment}'. Expected one of: {supported}"
        ) from None
    return BASE_URLS[env]
