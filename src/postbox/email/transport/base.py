"""Base interface for email transports."""

from abc import ABC, abstractmethod

from ...domain.email import EmailMessage, SendResponse


class BaseTransport(ABC):
    """Provider boundary: accepts a message, reports success or an error.

    Provider rejections come back as ``SendResponse.error`` rather than
    being raised, so callers decide how to surface them.
    """

    @abstractmethod
    async def send(self, message: EmailMessage) -> SendResponse:
        """Send a single message."""
        pass
