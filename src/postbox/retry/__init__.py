"""Retry execution - executors and the with_retry helper."""

from ..domain.exceptions import ExhaustedRetriesError
from ..domain.retry import RetryConfig, always_retry, retry_unless
from .base import BaseRetryExecutor
from .executor import RetryExecutor, SleepFunc, with_retry
from .null import NullRetryExecutor

__all__ = [
    "BaseRetryExecutor",
    "RetryExecutor",
    "NullRetryExecutor",
    "SleepFunc",
    "with_retry",
    "RetryConfig",
    "always_retry",
    "retry_unless",
    "ExhaustedRetriesError",
]
