"""Domain models for retry configuration."""

import typing as t
from dataclasses import dataclass, field, replace

from .exceptions import InvalidRetryConfigError

# Observer invoked before each backoff sleep; may return an awaitable.
RetryObserver = t.Callable[[int, Exception], t.Awaitable[None] | None]
RetryPredicate = t.Callable[[Exception], bool]


def always_retry(error: Exception) -> bool:
    """Default classification: every failure is retryable."""
    return True


def retry_unless(*exc_types: type[BaseException]) -> RetryPredicate:
    """Build a predicate that refuses to retry the given exception types.

    Args:
        exc_types: Exception classes treated as permanent failures

    Returns:
        Predicate returning False for instances of ``exc_types``, True otherwise
    """

    def predicate(error: Exception) -> bool:
        return not isinstance(error, exc_types)

    return predicate


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behaviour with exponential backoff.

    Delays are in seconds. ``max_attempts`` counts every attempt, the first
    one included, so ``max_attempts=1`` never retries.
    """

    max_attempts: int = 3
    initial_delay: float = 1.0  # Delay before the second attempt
    max_delay: float = 10.0  # Cap on any single delay
    backoff_multiplier: float = 2.0
    should_retry: RetryPredicate = field(default=always_retry, compare=False)
    on_retry: RetryObserver | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.max_attempts, bool) or not isinstance(
            self.max_attempts, int
        ):
            raise InvalidRetryConfigError(
                f"max_attempts must be an integer, got {self.max_attempts!r}"
            )
        if self.max_attempts < 1:
            raise InvalidRetryConfigError(
                f"max_attempts must be at least 1, got {self.max_attempts}"
            )
        if self.initial_delay < 0:
            raise InvalidRetryConfigError(
                f"initial_delay must be non-negative, got {self.initial_delay}"
            )
        if self.max_delay < 0:
            raise InvalidRetryConfigError(
                f"max_delay must be non-negative, got {self.max_delay}"
            )
        if self.backoff_multiplier < 1:
            raise InvalidRetryConfigError(
                f"backoff_multiplier must be >= 1, got {self.backoff_multiplier}"
            )

    @property
    def delay_ceiling(self) -> float:
        """Effective cap on a single delay.

        When ``max_delay`` is below ``initial_delay`` the initial delay wins.
        """
        return max(self.max_delay, self.initial_delay)

    def calculate_delay(self, attempt: int) -> float:
        """
        Calculate the delay after a failed attempt.

        Formula: min(initial_delay * (backoff_multiplier ^ (attempt - 1)), ceiling)

        Args:
            attempt: Number of the attempt that just failed (1-indexed)

        Returns:
            Delay in seconds before the next attempt

        Examples:
            >>> config = RetryConfig(initial_delay=1.0, backoff_multiplier=2.0)
            >>> config.calculate_delay(1)  # Before the second attempt
            1.0
            >>> config.calculate_delay(2)
            2.0
            >>> config.calculate_delay(3)
            4.0
        """
        delay = self.initial_delay * (self.backoff_multiplier ** (attempt - 1))
        return min(delay, self.delay_ceiling)

    def with_overrides(self, **overrides: t.Any) -> "RetryConfig":
        """Return a copy with every non-None override applied."""
        filtered = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered)
