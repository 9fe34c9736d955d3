"""Transactional email - service, content and transports."""

from ..domain.exceptions import EmailSendError
from .service import EmailService
from .transport import BaseTransport, MemoryTransport, ResendTransport, create_transport

__all__ = [
    "EmailService",
    "EmailSendError",
    "BaseTransport",
    "MemoryTransport",
    "ResendTransport",
    "create_transport",
]
