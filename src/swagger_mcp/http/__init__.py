"""HTTP transport: async client wrapper and auth strategies."""

from .auth import BearerAuth, NoAuth, auth_for
from .client import HttpClient

__all__ = ["BearerAuth", "HttpClient", "NoAuth", "auth_for"]
