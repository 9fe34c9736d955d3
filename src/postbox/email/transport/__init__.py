"""Email transports."""

from .base import BaseTransport
from .factory import create_transport
from .memory import MemoryTransport
from .resend import ResendTransport

__all__ = ["BaseTransport", "MemoryTransport", "ResendTransport", "create_transport"]
