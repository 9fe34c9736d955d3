"""Shared fixtures for email tests."""

import pytest

from postbox.domain.email import EmailMessage, TransportError
from postbox.email import EmailService
from postbox.retry import RetryExecutor


@pytest.fixture
def provider_error():
    """Provide a retryable-looking provider error."""
    return TransportError(
        name="internal_server_error", message="boom", status_code=500
    )


@pytest.fixture
def message():
    """Provide a ready-to-send message."""
    return EmailMessage(
        sender="Postbox <noreply@example.com>",
        to="ada@example.com",
        subject="Verify your email address",
        html="<p>Hi Ada</p>",
        text="Hi Ada",
    )


@pytest.fixture
def email_service(memory_transport, mock_logger, mock_emitter, fake_sleep):
    """Provide an EmailService over a memory transport with recorded sleeps."""
    return EmailService(
        memory_transport,
        sender="Postbox <noreply@example.com>",
        logger=mock_logger,
        emitter=mock_emitter,
        executor=RetryExecutor(sleep=fake_sleep),
    )
