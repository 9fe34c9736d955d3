"""Null object implementation of retry executor."""

import typing as t

from ..domain.retry import RetryConfig
from .base import BaseRetryExecutor

T = t.TypeVar("T")


class NullRetryExecutor(BaseRetryExecutor):
    """Executor that runs the operation once and never retries.

    Errors propagate unchanged; ``config`` is accepted for interface
    compatibility and ignored.
    """

    async def execute(
        self,
        operation: t.Callable[[], t.Awaitable[T]],
        context: str,
        config: RetryConfig | None = None,
    ) -> T:
        return await operation()
