"""Base interface for retry executors."""

import typing as t
from abc import ABC, abstractmethod

from ..domain.retry import RetryConfig

T = t.TypeVar("T")


class BaseRetryExecutor(ABC):
    """Abstract base class for retry executors.

    This interface defines the contract for retry executors, allowing
    different retry strategies (e.g., exponential backoff, no retry)
    to be used interchangeably via dependency injection.
    """

    @abstractmethod
    async def execute(
        self,
        operation: t.Callable[[], t.Awaitable[T]],
        context: str,
        config: RetryConfig | None = None,
    ) -> T:
        """Execute an async operation with retry logic.

        Args:
            operation: Zero-argument async callable to execute.
            context: Human-readable label used only in error messages.
            config: Optional per-call configuration (implementation-specific).

        Returns:
            The result of the operation.

        Raises:
            Exception: The original error when it is not retryable, or an
                implementation-specific terminal error once attempts run out.
        """
        pass
