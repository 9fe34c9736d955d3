"""In-memory transport for dry runs and tests."""

import uuid
from collections import deque

from ...domain.email import EmailMessage, SendResponse, TransportError
from .base import BaseTransport


class MemoryTransport(BaseTransport):
    """Records messages instead of delivering them.

    Errors primed with ``fail_next`` are returned, oldest first, before any
    message is accepted.
    """

    def __init__(self) -> None:
        self.sent: list[EmailMessage] = []
        self.attempts = 0
        self._pending_errors: deque[TransportError] = deque()

    def fail_next(self, error: TransportError, times: int = 1) -> None:
        """Queue ``error`` to be returned by the next ``times`` sends."""
        self._pending_errors.extend([error] * times)

    async def send(self, message: EmailMessage) -> SendResponse:
        self.attempts += 1
        if self._pending_errors:
            return SendResponse(error=self._pending_errors.popleft())
        self.sent.append(message)
        return SendResponse.ok(str(uuid.uuid4()))
