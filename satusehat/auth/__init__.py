"""
Authentication module for the SATUSEHAT client.

Provides the client-credentials token manager.
"""

from satusehat.auth.token_manager import TokenManager

__all__ = [
    "TokenManager",
]
