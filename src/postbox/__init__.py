"""postbox - transactional email delivery with async retry and backoff."""

from .app import App, create_app
from .config import Settings
from .domain.exceptions import ExhaustedRetriesError
from .domain.retry import RetryConfig, retry_unless
from .email import EmailService
from .retry import NullRetryExecutor, RetryExecutor, with_retry

__all__ = [
    "App",
    "create_app",
    "Settings",
    "RetryConfig",
    "retry_unless",
    "RetryExecutor",
    "NullRetryExecutor",
    "with_retry",
    "ExhaustedRetriesError",
    "EmailService",
]
