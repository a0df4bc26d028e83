#!/usr/bin/env python3
"""
Test runner script for the SATUSEHAT client.

Usage:
    python scripts/run_tests.py [--coverage] [--verbose] [--e2e] [pattern]

Examples:
    python scripts/run_tests.py                    # Run unit tests
    python scripts/run_tests.py --coverage         # Run with coverage report
    python scripts/run_tests.py test_token         # Run tests matching pattern
    python scripts/run_tests.py --e2e              # Include staging API tests

The --e2e tests need SATUSEHAT_E2E_CLIENT_ID and SATUSEHAT_E2E_CLIENT_SECRET for
the staging environment.
"""

import subprocess
import sys
from pathlib import Path


def main():
    args = sys.argv[1:]

    # Base pytest command
    cmd = ["uv", "run", "pytest"]

    # Parse arguments
    coverage = False
    verbose = False
    e2e = False
    patterns = []

    for arg in args:
        if arg == "--coverage":
            coverage = True
        elif arg == "--verbose" or arg == "-v":
            verbose = True
        elif arg == "--e2e":
            e2e = True
        elif not arg.startswith("-"):
            patterns.append(arg)

    if coverage:
        cmd.extend(["--cov=satusehat", "--cov-report=term-missing", "--cov-report=html"])

    if verbose:
        cmd.append("-v")
    else:
        cmd.append("-q")

    # Staging tests hit the live API
    if not e2e:
        cmd.extend(["-m", "not e2e"])

    if patterns:
        cmd.extend(["-k", " or ".join(patterns)])

    project_root = Path(__file__).parent.parent

    print(f"Running: {' '.join(cmd)}")
    print("-" * 60)

    result = subprocess.run(cmd, cwd=project_root)
    sys.exit(result.returncode)


if __name__ == "__main__":
    main()
