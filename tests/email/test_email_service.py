"""Tests for EmailService delivery and retry behaviour."""

import asyncio

import pytest
from pydantic import ValidationError

from postbox.domain.email import EmailType, TransportError
from postbox.domain.exceptions import EmailSendError, ExhaustedRetriesError
from postbox.domain.retry import RetryConfig
from postbox.email import EmailService, MemoryTransport
from postbox.events import EmailFailedEvent, EmailRetryingEvent, EmailSentEvent
from postbox.retry import NullRetryExecutor, RetryExecutor


def emitted(mock_emitter) -> list[str]:
    return [call.args[0] for call in mock_emitter.emit.call_args_list]


class TestSendVerificationEmail:
    @pytest.mark.asyncio
    async def test_sends_message(self, email_service, memory_transport) -> None:
        sent = await email_service.send_verification_email(
            "ada@example.com",
            "Ada",
            "https://app.example.com/verify?token=abc",
            user_id="user-1",
        )

        assert sent.id
        assert memory_transport.attempts == 1
        message = memory_transport.sent[0]
        assert message.to == "ada@example.com"
        assert message.sender == "Postbox <noreply@example.com>"
        assert message.subject == "Verify your email address"
        assert "https://app.example.com/verify?token=abc" in message.text
        assert "Hi Ada" in message.html
        assert [(t.name, t.value) for t in message.tags] == [
            ("type", "verification"),
            ("user_id", "user-1"),
        ]

    @pytest.mark.asyncio
    async def test_escapes_user_name_in_html(
        self, email_service, memory_transport
    ) -> None:
        await email_service.send_verification_email(
            "ada@example.com", "<b>Ada</b>", "https://app.example.com/verify"
        )

        assert "&lt;b&gt;Ada&lt;/b&gt;" in memory_transport.sent[0].html

    @pytest.mark.asyncio
    async def test_invalid_input_never_reaches_transport(
        self, email_service, memory_transport
    ) -> None:
        with pytest.raises(ValidationError):
            await email_service.send_verification_email(
                "not-an-email", "Ada", "https://app.example.com/verify"
            )

        assert memory_transport.attempts == 0

    @pytest.mark.asyncio
    async def test_emits_sent_event(self, email_service, mock_emitter) -> None:
        sent = await email_service.send_verification_email(
            "ada@example.com", "Ada", "https://app.example.com/verify"
        )

        mock_emitter.emit.assert_awaited_once()
        event_name, event = mock_emitter.emit.call_args[0]
        assert event_name == "email.sent"
        assert isinstance(event, EmailSentEvent)
        assert event.email_type == EmailType.VERIFICATION
        assert event.email_id == sent.id


class TestSendPasswordResetEmail:
    @pytest.mark.asyncio
    async def test_sends_message(self, email_service, memory_transport) -> None:
        await email_service.send_password_reset_email(
            "ada@example.com", "Ada", "https://app.example.com/reset?token=xyz"
        )

        message = memory_transport.sent[0]
        assert message.subject == "Reset your password"
        assert "https://app.example.com/reset?token=xyz" in message.text
        assert [(t.name, t.value) for t in message.tags] == [
            ("type", "password_reset")
        ]

    @pytest.mark.asyncio
    async def test_invalid_reset_url(self, email_service, memory_transport) -> None:
        with pytest.raises(ValidationError, match="reset_url"):
            await email_service.send_password_reset_email(
                "ada@example.com", "Ada", "reset-me"
            )

        assert memory_transport.attempts == 0


class TestTransientFailures:
    @pytest.mark.asyncio
    async def test_retries_until_success(
        self, email_service, memory_transport, provider_error, sleeps
    ) -> None:
        memory_transport.fail_next(provider_error, times=2)

        await email_service.send_password_reset_email(
            "ada@example.com", "Ada", "https://app.example.com/reset"
        )

        assert memory_transport.attempts == 3
        assert len(memory_transport.sent) == 1
        assert sleeps == [1.0, 2.0]

    @pytest.mark.asyncio
    async def test_logs_each_send_error(
        self, email_service, memory_transport, provider_error, mock_logger
    ) -> None:
        memory_transport.fail_next(provider_error, times=2)

        await email_service.send_verification_email(
            "ada@example.com", "Ada", "https://app.example.com/verify"
        )

        assert mock_logger.error.call_count == 2
        extras = mock_logger.error.call_args.kwargs
        assert extras["event"] == "email_send_error"
        assert extras["email_type"] == "verification"
        assert extras["to"] == "ada@example.com"
        assert extras["error"] == {"name": "internal_server_error", "message": "boom"}

    @pytest.mark.asyncio
    async def test_logs_each_retry_attempt(
        self, email_service, memory_transport, provider_error, mock_logger
    ) -> None:
        memory_transport.fail_next(provider_error, times=2)

        await email_service.send_password_reset_email(
            "ada@example.com", "Ada", "https://app.example.com/reset"
        )

        calls = mock_logger.warning.call_args_list
        assert [call.kwargs["attempt"] for call in calls] == [1, 2]
        extras = calls[0].kwargs
        assert extras["event"] == "email_retry_attempt"
        assert extras["email_type"] == "password_reset"
        assert extras["to"] == "ada@example.com"
        assert extras["error"] == {
            "name": "internal_server_error",
            "message": "Failed to send email: boom",
        }

    @pytest.mark.asyncio
    async def test_emits_retrying_events_before_sent(
        self, email_service, memory_transport, provider_error, mock_emitter
    ) -> None:
        memory_transport.fail_next(provider_error, times=1)

        await email_service.send_verification_email(
            "ada@example.com", "Ada", "https://app.example.com/verify"
        )

        assert emitted(mock_emitter) == ["email.retrying", "email.sent"]
        retrying = mock_emitter.emit.call_args_list[0].args[1]
        assert isinstance(retrying, EmailRetryingEvent)
        assert retrying.attempt == 1
        assert retrying.max_attempts == 3
        assert retrying.delay_seconds == 1.0
        assert "boom" in retrying.error.message


class TestExhaustedRetries:
    @pytest.mark.asyncio
    async def test_raises_after_three_attempts(
        self, email_service, memory_transport, provider_error, mock_logger
    ) -> None:
        memory_transport.fail_next(provider_error, times=3)

        with pytest.raises(ExhaustedRetriesError) as exc_info:
            await email_service.send_verification_email(
                "ada@example.com", "Ada", "https://app.example.com/verify"
            )

        assert str(exc_info.value) == (
            "Send verification email to ada@example.com failed after 3 attempts: "
            "Failed to send email: boom"
        )
        assert isinstance(exc_info.value.last_error, EmailSendError)
        assert memory_transport.attempts == 3
        assert memory_transport.sent == []
        # No retry log for the final, terminal failure
        assert mock_logger.warning.call_count == 2

    @pytest.mark.asyncio
    async def test_emits_failed_event(
        self, email_service, memory_transport, provider_error, mock_emitter
    ) -> None:
        memory_transport.fail_next(provider_error, times=3)

        with pytest.raises(ExhaustedRetriesError):
            await email_service.send_password_reset_email(
                "ada@example.com", "Ada", "https://app.example.com/reset"
            )

        assert emitted(mock_emitter) == [
            "email.retrying",
            "email.retrying",
            "email.failed",
        ]
        failed = mock_emitter.emit.call_args_list[-1].args[1]
        assert isinstance(failed, EmailFailedEvent)
        assert failed.email_type == EmailType.PASSWORD_RESET
        assert "3 attempts" in failed.error.message


class TestRetryWiring:
    @pytest.mark.asyncio
    async def test_retry_config_override(
        self, memory_transport, provider_error, mock_logger, mock_emitter, fake_sleep
    ) -> None:
        service = EmailService(
            memory_transport,
            sender="Postbox <noreply@example.com>",
            logger=mock_logger,
            emitter=mock_emitter,
            executor=RetryExecutor(sleep=fake_sleep),
            retry_config=RetryConfig(max_attempts=1),
        )
        memory_transport.fail_next(provider_error)

        with pytest.raises(ExhaustedRetriesError, match="1 attempts"):
            await service.send_verification_email(
                "ada@example.com", "Ada", "https://app.example.com/verify"
            )

        assert memory_transport.attempts == 1
        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_null_executor_surfaces_send_error(
        self, memory_transport, provider_error, mock_logger, mock_emitter
    ) -> None:
        service = EmailService(
            memory_transport,
            sender="Postbox <noreply@example.com>",
            logger=mock_logger,
            emitter=mock_emitter,
            executor=NullRetryExecutor(),
        )
        memory_transport.fail_next(provider_error)

        with pytest.raises(EmailSendError, match="Failed to send email: boom"):
            await service.send_verification_email(
                "ada@example.com", "Ada", "https://app.example.com/verify"
            )

        assert memory_transport.attempts == 1

    @pytest.mark.asyncio
    async def test_real_emitter_delivers_events_to_handlers(
        self, memory_transport, provider_error, mock_logger, real_emitter, fake_sleep
    ) -> None:
        received = []
        real_emitter.on("email.retrying", lambda event: received.append(event.attempt))
        service = EmailService(
            memory_transport,
            sender="Postbox <noreply@example.com>",
            logger=mock_logger,
            emitter=real_emitter,
            executor=RetryExecutor(sleep=fake_sleep),
        )
        memory_transport.fail_next(provider_error, times=2)

        await service.send_verification_email(
            "ada@example.com", "Ada", "https://app.example.com/verify"
        )

        assert received == [1, 2]

    @pytest.mark.asyncio
    async def test_concurrent_sends_are_isolated(self, mock_logger, fake_sleep) -> None:
        transport = MemoryTransport()
        transport.fail_next(TransportError(name="rate_limit_exceeded", message="slow"))
        service = EmailService(
            transport,
            sender="Postbox <noreply@example.com>",
            logger=mock_logger,
            executor=RetryExecutor(sleep=fake_sleep),
        )

        results = await asyncio.gather(
            service.send_verification_email(
                "ada@example.com", "Ada", "https://app.example.com/verify"
            ),
            service.send_password_reset_email(
                "grace@example.com", "Grace", "https://app.example.com/reset"
            ),
        )

        assert len({sent.id for sent in results}) == 2
        assert sorted(m.to for m in transport.sent) == [
            "ada@example.com",
            "grace@example.com",
        ]
        assert transport.attempts == 3
