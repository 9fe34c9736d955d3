"""Transactional email service with retried delivery.

This module provides an EmailService that validates inputs, builds
verification and password reset messages, and delivers them through a
transport under a retry executor.
"""

import typing as t

from ..domain.email import (
    EmailMessage,
    EmailMetadata,
    EmailType,
    PasswordResetEmailRequest,
    SentEmail,
    VerificationEmailRequest,
)
from ..domain.exceptions import EmailSendError
from ..domain.retry import RetryConfig
from ..events import (
    BaseEmitter,
    EmailFailedEvent,
    EmailRetryingEvent,
    EmailSentEvent,
    ErrorInfo,
    EventEmitter,
)
from ..infrastructure.logging import get_logger
from ..retry import BaseRetryExecutor, RetryExecutor
from .content import (
    PASSWORD_RESET_SUBJECT,
    VERIFICATION_SUBJECT,
    password_reset_content,
    verification_content,
)
from .transport.base import BaseTransport

if t.TYPE_CHECKING:
    import loguru

DEFAULT_MAX_ATTEMPTS = 3


def _error_fields(error: Exception) -> dict[str, str]:
    """Name/message pair used in structured log records."""
    return {"name": getattr(error, "name", type(error).__name__), "message": str(error)}


class EmailService:
    """Sends verification and password reset emails.

    Implementation Decisions:
    - Inputs are validated with pydantic before any send; invalid input
      raises ``pydantic.ValidationError`` and never reaches the provider
    - Each provider rejection is logged (``email_send_error``) and raised as
      ``EmailSendError`` so the executor can retry it
    - Every retry is logged (``email_retry_attempt``) and emitted as
      ``email.retrying`` before the backoff sleep
    - Retrying re-sends the whole message; a provider that accepted an
      earlier attempt but failed to answer may deliver twice
    """

    def __init__(
        self,
        transport: BaseTransport,
        sender: str,
        logger: "loguru.Logger" = get_logger(__name__),
        emitter: BaseEmitter | None = None,
        executor: BaseRetryExecutor | None = None,
        retry_config: RetryConfig | None = None,
    ) -> None:
        """
        Initialise email service.

        Args:
            transport: Provider boundary used for each send attempt
            sender: ``From`` header, e.g. ``"Postbox <noreply@example.com>"``
            logger: Logger for send failures and retry attempts
            emitter: Event emitter for email lifecycle events.
                    If None, a new EventEmitter will be created.
            executor: Retry executor. If None, a RetryExecutor is created.
            retry_config: Base retry configuration. If None, defaults with
                    three attempts are used.
        """
        self.transport = transport
        self.sender = sender
        self.logger = logger
        self.emitter = emitter if emitter is not None else EventEmitter(logger)
        self.executor = executor if executor is not None else RetryExecutor()
        self.retry_config = (
            retry_config
            if retry_config is not None
            else RetryConfig(max_attempts=DEFAULT_MAX_ATTEMPTS)
        )

    async def send_verification_email(
        self,
        to: str,
        user_name: str,
        verification_url: str,
        user_id: str | None = None,
    ) -> SentEmail:
        """Validate input and send a verification email.

        Raises:
            pydantic.ValidationError: Invalid address, name or URL
            ExhaustedRetriesError: Every attempt was rejected
        """
        request = VerificationEmailRequest(
            to=to, user_name=user_name, verification_url=verification_url
        )
        html, text = verification_content(request)
        message = EmailMessage(
            sender=self.sender,
            to=request.to,
            subject=VERIFICATION_SUBJECT,
            html=html,
            text=text,
        )
        metadata = EmailMetadata(
            email_type=EmailType.VERIFICATION, recipient=request.to, user_id=user_id
        )
        return await self._send_with_retry(message, metadata)

    async def send_password_reset_email(
        self,
        to: str,
        user_name: str,
        reset_url: str,
        user_id: str | None = None,
    ) -> SentEmail:
        """Validate input and send a password reset email.

        Raises:
            pydantic.ValidationError: Invalid address, name or URL
            ExhaustedRetriesError: Every attempt was rejected
        """
        request = PasswordResetEmailRequest(
            to=to, user_name=user_name, reset_url=reset_url
        )
        html, text = password_reset_content(request)
        message = EmailMessage(
            sender=self.sender,
            to=request.to,
            subject=PASSWORD_RESET_SUBJECT,
            html=html,
            text=text,
        )
        metadata = EmailMetadata(
            email_type=EmailType.PASSWORD_RESET, recipient=request.to, user_id=user_id
        )
        return await self._send_with_retry(message, metadata)

    async def _send(self, message: EmailMessage, metadata: EmailMetadata) -> SentEmail:
        """Make a single send attempt."""
        tagged = message.model_copy(update={"tags": metadata.tags()})
        response = await self.transport.send(tagged)

        if response.error is not None:
            error = response.error
            self.logger.error(
                "Failed to send {email_type} email to {to}",
                event="email_send_error",
                email_type=metadata.email_type.value,
                to=metadata.recipient,
                error={"name": error.name, "message": error.message},
            )
            raise EmailSendError(error.message, name=error.name)

        assert response.data is not None
        return response.data

    async def _send_with_retry(
        self, message: EmailMessage, metadata: EmailMetadata
    ) -> SentEmail:
        config = self.retry_config

        async def on_retry(attempt: int, error: Exception) -> None:
            self.logger.warning(
                "Retrying {email_type} email to {to} (attempt {attempt} failed)",
                event="email_retry_attempt",
                attempt=attempt,
                email_type=metadata.email_type.value,
                to=metadata.recipient,
                error=_error_fields(error),
            )
            await self.emitter.emit(
                "email.retrying",
                EmailRetryingEvent(
                    email_type=metadata.email_type,
                    recipient=metadata.recipient,
                    user_id=metadata.user_id,
                    attempt=attempt,
                    max_attempts=config.max_attempts,
                    delay_seconds=config.calculate_delay(attempt),
                    error=ErrorInfo.from_exception(error),
                ),
            )

        try:
            sent = await self.executor.execute(
                lambda: self._send(message, metadata),
                f"Send {metadata.email_type.value} email to {metadata.recipient}",
                config.with_overrides(on_retry=on_retry),
            )
        except Exception as e:
            await self.emitter.emit(
                "email.failed",
                EmailFailedEvent(
                    email_type=metadata.email_type,
                    recipient=metadata.recipient,
                    user_id=metadata.user_id,
                    error=ErrorInfo.from_exception(e),
                ),
            )
            raise

        await self.emitter.emit(
            "email.sent",
            EmailSentEvent(
                email_type=metadata.email_type,
                recipient=metadata.recipient,
                user_id=metadata.user_id,
                email_id=sent.id,
            ),
        )
        return sent
