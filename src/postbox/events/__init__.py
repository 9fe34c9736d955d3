"""Event infrastructure - event emitter and event types."""

from .base import BaseEmitter
from .emitter import EventEmitter
from .models import (
    BaseEvent,
    EmailEvent,
    EmailFailedEvent,
    EmailRetryingEvent,
    EmailSentEvent,
    ErrorInfo,
)
from .null import NullEmitter

__all__ = [
    # Base and implementations
    "BaseEmitter",
    "EventEmitter",
    "NullEmitter",
    # Models
    "BaseEvent",
    "ErrorInfo",
    "EmailEvent",
    "EmailSentEvent",
    "EmailRetryingEvent",
    "EmailFailedEvent",
]
