"""Custom exceptions for postbox."""


class PostboxError(Exception):
    """Base exception for postbox errors."""

    pass


class RetryError(PostboxError):
    """Raised when retry logic encounters an unexpected state.

    This exception indicates a programming error in the retry executor,
    such as completing the attempt loop without returning or raising.
    """

    pass


class ExhaustedRetriesError(RetryError):
    """Raised when every permitted attempt failed with a retryable error.

    Carries the diagnostic context label, the number of attempts made and
    the final underlying exception (also chained as ``__cause__``).
    """

    def __init__(self, *, context: str, attempts: int, last_error: BaseException):
        self.context = context
        self.attempts = attempts
        self.last_error = last_error
        message = str(last_error) or "Unknown error"
        super().__init__(f"{context} failed after {attempts} attempts: {message}")


class InvalidRetryConfigError(PostboxError, ValueError):
    """Raised when a RetryConfig is constructed with out-of-range values."""

    pass


class EmailError(PostboxError):
    """Base exception for email delivery errors."""

    pass


class EmailSendError(EmailError):
    """Raised when the email provider rejects a single send attempt."""

    def __init__(self, message: str, *, name: str = "application_error") -> None:
        self.name = name
        self.provider_message = message
        super().__init__(f"Failed to send email: {message}")


class TransportNotConfiguredError(EmailError):
    """Raised when a provider transport is requested without credentials."""

    pass


class ClientNotInitialisedError(PostboxError):
    """Raised when the HTTP client is used before it has been opened.

    Open the client with ``await client.open()`` or use it as an async
    context manager.
    """

    pass
