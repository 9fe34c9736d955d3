"""Retry executor with exponential backoff."""

import asyncio
import inspect
import typing as t

from ..domain.exceptions import ExhaustedRetriesError, RetryError
from ..domain.retry import RetryConfig
from .base import BaseRetryExecutor

T = t.TypeVar("T")

SleepFunc = t.Callable[[float], t.Awaitable[t.Any]]


class RetryExecutor(BaseRetryExecutor):
    """Runs an async operation, retrying classified failures with backoff.

    The executor holds only immutable configuration and a sleep primitive,
    so a single instance can serve any number of concurrent ``execute``
    calls. It never logs: callers observe retries through
    ``RetryConfig.on_retry``.

    Outcomes of ``execute``:
    - the operation's result on the first successful attempt
    - the original exception, unwrapped, when ``should_retry`` rejects it
    - ``ExhaustedRetriesError`` once ``max_attempts`` attempts have failed

    ``asyncio.CancelledError`` is not an ``Exception`` and is never
    classified; cancelling the awaiting task abandons the remaining
    attempts, including mid-backoff.
    """

    def __init__(
        self,
        config: RetryConfig | None = None,
        sleep: SleepFunc | None = None,
    ) -> None:
        """
        Initialise retry executor.

        Args:
            config: Default configuration used when ``execute`` gets none
            sleep: Async delay primitive taking seconds. Defaults to
                ``asyncio.sleep``; inject a fake to drive backoff in tests.
        """
        self.config = config if config is not None else RetryConfig()
        self._sleep = sleep if sleep is not None else asyncio.sleep

    async def execute(
        self,
        operation: t.Callable[[], t.Awaitable[T]],
        context: str,
        config: RetryConfig | None = None,
    ) -> T:
        """
        Execute async operation, retrying failures the config classifies
        as retryable.

        Args:
            operation: Zero-argument async callable; re-invoked in full on
                every attempt
            context: Label for the terminal error message
            config: Override the executor's default configuration

        Returns:
            Result of the operation

        Raises:
            ExhaustedRetriesError: Every attempt failed with a retryable error
            Exception: The original error when ``should_retry`` returned False,
                or whatever ``on_retry`` raised
        """
        effective = config if config is not None else self.config

        for attempt in range(1, effective.max_attempts + 1):
            try:
                return await operation()

            except Exception as e:
                # Consulted on every failure, before the attempt-count check
                if not effective.should_retry(e):
                    raise

                if attempt == effective.max_attempts:
                    raise ExhaustedRetriesError(
                        context=context, attempts=attempt, last_error=e
                    ) from e

                delay = effective.calculate_delay(attempt)

                # Observer completes before the sleep starts
                if effective.on_retry is not None:
                    outcome = effective.on_retry(attempt, e)
                    if inspect.isawaitable(outcome):
                        await outcome

                await self._sleep(delay)

        # Unreachable: max_attempts >= 1 is enforced by RetryConfig
        raise RetryError("Retry loop completed without returning or raising")


async def with_retry(
    operation: t.Callable[[], t.Awaitable[T]],
    context: str,
    config: RetryConfig | None = None,
    *,
    sleep: SleepFunc | None = None,
) -> T:
    """Run ``operation`` once under a fresh ``RetryExecutor``.

    Convenience for call sites that do not need a long-lived executor.
    """
    return await RetryExecutor(config, sleep=sleep).execute(operation, context)
