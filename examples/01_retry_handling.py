#!/usr/bin/env python3
"""
01_retry_handling.py - Retried email delivery with exponential backoff

Demonstrates:
- Priming an in-memory transport with provider errors
- Subscribing to email.retrying events for observability
- Retry exhaustion behaviour
- The generic executor on its own, with a non-retryable error type

Runs offline: no provider is contacted.
"""

import asyncio
from datetime import datetime

from postbox import EmailService, RetryConfig, with_retry
from postbox.domain import ExhaustedRetriesError, TransportError, retry_unless
from postbox.email import MemoryTransport
from postbox.events import EmailRetryingEvent


def on_retrying(event: EmailRetryingEvent) -> None:
    """Print retry attempts with timing info."""
    ts = datetime.now().strftime("%H:%M:%S.%f")[:-3]
    print(
        f"  [{ts}] Attempt {event.attempt}/{event.max_attempts} "
        f"to {event.recipient} failed, retrying in {event.delay_seconds:.2f}s "
        f"(error: {event.error.exc_type})"
    )


def build_service(transport: MemoryTransport) -> EmailService:
    service = EmailService(
        transport,
        sender="Postbox <noreply@example.com>",
        retry_config=RetryConfig(max_attempts=3, initial_delay=0.2, max_delay=1.0),
    )
    service.emitter.on("email.retrying", on_retrying)
    return service


async def example_transient_failure() -> None:
    """Two rate-limit errors, then success on the third attempt."""
    print("=" * 70)
    print("Example 1: Transient Provider Errors")
    print("=" * 70)

    transport = MemoryTransport()
    transport.fail_next(
        TransportError(name="rate_limit_exceeded", message="Too many requests"),
        times=2,
    )
    service = build_service(transport)

    sent = await service.send_verification_email(
        "ada@example.com", "Ada", "https://app.example.com/verify?token=abc"
    )
    print(f"\nDelivered as {sent.id} after {transport.attempts} attempts\n")


async def example_exhausted() -> None:
    """Every attempt rejected."""
    print("=" * 70)
    print("Example 2: Retry Exhaustion")
    print("=" * 70)

    transport = MemoryTransport()
    transport.fail_next(
        TransportError(name="internal_server_error", message="Provider down"),
        times=5,
    )
    service = build_service(transport)

    try:
        await service.send_password_reset_email(
            "ada@example.com", "Ada", "https://app.example.com/reset?token=xyz"
        )
    except ExhaustedRetriesError as e:
        print(f"\nGave up: {e}\n")


async def example_generic_executor() -> None:
    """The executor wraps any coroutine; KeyError is never retried."""
    print("=" * 70)
    print("Example 3: Generic Executor")
    print("=" * 70)

    async def lookup() -> str:
        raise KeyError("missing")

    try:
        await with_retry(
            lookup,
            "Lookup user",
            RetryConfig(should_retry=retry_unless(KeyError)),
        )
    except KeyError as e:
        print(f"\nFailed fast without retrying: {e!r}\n")


async def main() -> None:
    """Run all retry examples."""
    await example_transient_failure()
    await example_exhausted()
    await example_generic_executor()


if __name__ == "__main__":
    asyncio.run(main())
