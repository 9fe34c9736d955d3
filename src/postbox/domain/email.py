"""Email domain models: requests, messages and provider responses."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, EmailStr, Field, HttpUrl, model_validator


class EmailType(str, Enum):
    """Kinds of transactional email the service sends."""

    VERIFICATION = "verification"
    PASSWORD_RESET = "password_reset"


class _BaseEmailRequest(BaseModel):
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    to: EmailStr = Field(description="Recipient address")
    user_name: str = Field(min_length=1, max_length=100)


class VerificationEmailRequest(_BaseEmailRequest):
    """Validated input for a verification email."""

    verification_url: HttpUrl


class PasswordResetEmailRequest(_BaseEmailRequest):
    """Validated input for a password reset email."""

    reset_url: HttpUrl


class EmailTag(BaseModel):
    """Provider-side tag attached to a message for filtering."""

    model_config = ConfigDict(frozen=True)

    name: str
    value: str


class EmailMetadata(BaseModel):
    """Diagnostic metadata describing a send, used for logs and tags."""

    model_config = ConfigDict(frozen=True)

    email_type: EmailType
    recipient: str
    user_id: str | None = None

    def tags(self) -> list[EmailTag]:
        """Render provider tags: always the type, the user id when known."""
        tags = [EmailTag(name="type", value=self.email_type.value)]
        if self.user_id:
            tags.append(EmailTag(name="user_id", value=self.user_id))
        return tags


class EmailMessage(BaseModel):
    """A fully built message ready for a transport."""

    model_config = ConfigDict(frozen=True)

    sender: str
    to: str
    subject: str
    html: str
    text: str
    tags: list[EmailTag] = Field(default_factory=list)


class SentEmail(BaseModel):
    """Success payload returned by the provider."""

    model_config = ConfigDict(frozen=True)

    id: str


class TransportError(BaseModel):
    """Structured error returned by the provider."""

    model_config = ConfigDict(frozen=True)

    name: str
    message: str
    status_code: int | None = None


class SendResponse(BaseModel):
    """Outcome of a single transport send: exactly one of data or error."""

    model_config = ConfigDict(frozen=True)

    data: SentEmail | None = None
    error: TransportError | None = None

    @model_validator(mode="after")
    def _exactly_one(self) -> "SendResponse":
        if (self.data is None) == (self.error is None):
            raise ValueError("SendResponse requires exactly one of data or error")
        return self

    @classmethod
    def ok(cls, email_id: str) -> "SendResponse":
        return cls(data=SentEmail(id=email_id))

    @classmethod
    def failed(
        cls, name: str, message: str, status_code: int | None = None
    ) -> "SendResponse":
        return cls(
            error=TransportError(name=name, message=message, status_code=status_code)
        )
