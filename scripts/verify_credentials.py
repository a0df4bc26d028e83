#!/usr/bin/env python3
"""
Verify SATUSEHAT credentials against the configured environment.

Usage:
    python scripts/verify_credentials.py [--organization-id ID] [--organization-name NAME]

Reads SATUSEHAT_CLIENT_ID, SATUSEHAT_CLIENT_SECRET and SATUSEHAT_ENVIRONMENT
from the environment (or a .env file).
"""

import argparse
import asyncio
import sys

from satusehat import SatusehatClient, SatusehatError
from satusehat.config import configure_logging, get_settings


async def verify(organization_id: str | None, organization_name: str | None) -> bool:
    """Fetch a token and optionally look up an organization."""
    try:
        client = SatusehatClient.from_settings()
    except SatusehatError as e:
        print(f"  [FAIL] Configuration: {e.message}")
        return False

    print(f"  Environment: {client.environment.value}")
    print(f"  FHIR base URL: {client.fhir_base_url}")

    results = []

    try:
        token = await client.get_access_token()
        print(f"  [OK] Access token: {token[:8]}...")
        results.append(True)
    except SatusehatError as e:
        print(f"  [FAIL] Access token: {e.message}")
        return False

    if organization_id:
        try:
            org = await client.organization.by_id(organization_id)
            print(f"  [OK] Organization/{organization_id}: {org.name}")
            results.append(True)
        except SatusehatError as e:
            print(f"  [FAIL] Organization/{organization_id}: {e.message}")
            results.append(False)

    if organization_name:
        try:
            bundle = await client.organization.by_name(organization_name)
            print(f"  [OK] Organization?name={organization_name}: {bundle.total} match(es)")
            results.append(True)
        except SatusehatError as e:
            print(f"  [FAIL] Organization?name={organization_name}: {e.message}")
            results.append(False)

    return all(results)


def main():
    parser = argparse.ArgumentParser(description="Verify SATUSEHAT credentials")
    parser.add_argument("--organization-id", help="Organization ID to read")
    parser.add_argument("--organization-name", help="Organization name to search for")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(settings.log_level, json_format=settings.log_json)

    print("\nVerifying SATUSEHAT credentials\n")
    print("=" * 60)

    ok = asyncio.run(verify(args.organization_id, args.organization_name))

    print("=" * 60)

    if ok:
        print("\nAll checks OK")
        return 0
    else:
        print("\nSome checks failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
