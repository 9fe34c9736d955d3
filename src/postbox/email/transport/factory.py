"""Transport selection from settings."""

from ...config.settings import Environment, Settings
from ...domain.exceptions import TransportNotConfiguredError
from ...infrastructure.http import AiohttpClient
from .base import BaseTransport
from .memory import MemoryTransport
from .resend import ResendTransport


def create_transport(settings: Settings, client: AiohttpClient) -> BaseTransport:
    """Pick the transport for ``settings``.

    Dry runs get a MemoryTransport. Without a Resend API key, development
    and testing fall back to a MemoryTransport too; production refuses to
    start rather than drop mail.

    Raises:
        TransportNotConfiguredError: Production settings without an API key
    """
    if settings.dry_run:
        return MemoryTransport()
    if settings.resend_api_key is None:
        if settings.environment == Environment.PRODUCTION:
            raise TransportNotConfiguredError(
                "POSTBOX_RESEND_API_KEY is required in production "
                "(set POSTBOX_DRY_RUN=true to skip delivery)"
            )
        return MemoryTransport()
    return ResendTransport(
        client,
        api_key=settings.resend_api_key.get_secret_value(),
        base_url=settings.resend_base_url,
    )
