"""Event data models."""

import traceback as tb
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict, Field

from ..domain.email import EmailType


class BaseEvent(BaseModel):
    """Base class for all events: immutable, timestamped, typed."""

    model_config = ConfigDict(frozen=True)

    event_type: str = Field(default="base", description="Event type identifier")
    occurred_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event was created (UTC)",
    )


class ErrorInfo(BaseModel):
    """Serialisable description of an exception."""

    model_config = ConfigDict(frozen=True)

    exc_type: str = Field(description="Fully qualified exception class name")
    message: str = Field(description="Exception message")
    traceback: str | None = Field(default=None, description="Formatted traceback")

    @classmethod
    def from_exception(
        cls, exc: BaseException, include_traceback: bool = False
    ) -> "ErrorInfo":
        exc_class = type(exc)
        return cls(
            exc_type=f"{exc_class.__module__}.{exc_class.__qualname__}",
            message=str(exc),
            traceback=(
                "".join(tb.format_exception(exc_class, exc, exc.__traceback__))
                if include_traceback
                else None
            ),
        )


class EmailEvent(BaseEvent):
    """Base class for email delivery events."""

    event_type: str = Field(default="email.base")
    email_type: EmailType = Field(description="Kind of email being sent")
    recipient: str = Field(description="Recipient address")
    user_id: str | None = Field(default=None, description="Owning user, if known")


class EmailSentEvent(EmailEvent):
    """Emitted when the provider accepted the message."""

    event_type: str = Field(default="email.sent")
    email_id: str = Field(description="Provider message id")


class EmailRetryingEvent(EmailEvent):
    """Emitted after a failed attempt, before the backoff sleep."""

    event_type: str = Field(default="email.retrying")
    attempt: int = Field(ge=1, description="Number of the attempt that failed")
    max_attempts: int = Field(ge=1, description="Total attempts permitted")
    delay_seconds: float = Field(ge=0, description="Backoff before next attempt")
    error: ErrorInfo


class EmailFailedEvent(EmailEvent):
    """Emitted when delivery failed terminally."""

    event_type: str = Field(default="email.failed")
    error: ErrorInfo
