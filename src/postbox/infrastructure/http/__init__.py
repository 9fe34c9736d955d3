"""HTTP client infrastructure."""

from .client import AiohttpClient
from .factories import create_secure_connector, create_ssl_context

__all__ = ["AiohttpClient", "create_secure_connector", "create_ssl_context"]
