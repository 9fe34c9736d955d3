"""Domain models and exceptions."""

from .email import (
    EmailMessage,
    EmailMetadata,
    EmailTag,
    EmailType,
    PasswordResetEmailRequest,
    SendResponse,
    SentEmail,
    TransportError,
    VerificationEmailRequest,
)
from .exceptions import (
    ClientNotInitialisedError,
    EmailError,
    EmailSendError,
    ExhaustedRetriesError,
    InvalidRetryConfigError,
    PostboxError,
    RetryError,
    TransportNotConfiguredError,
)
from .retry import RetryConfig, always_retry, retry_unless

__all__ = [
    # Retry
    "RetryConfig",
    "always_retry",
    "retry_unless",
    # Email
    "EmailType",
    "EmailTag",
    "EmailMetadata",
    "EmailMessage",
    "VerificationEmailRequest",
    "PasswordResetEmailRequest",
    "SentEmail",
    "TransportError",
    "SendResponse",
    # Exceptions
    "PostboxError",
    "RetryError",
    "ExhaustedRetriesError",
    "InvalidRetryConfigError",
    "EmailError",
    "EmailSendError",
    "TransportNotConfiguredError",
    "ClientNotInitialisedError",
]
