"""CLI state container."""

import typing as t
from contextlib import asynccontextmanager

from ..config.settings import Settings
from ..email import EmailService, create_transport
from ..infrastructure.http import AiohttpClient
from ..infrastructure.logging import get_logger

ServiceFactory = t.Callable[[Settings, AiohttpClient], EmailService]
ClientFactory = t.Callable[[Settings], AiohttpClient]


def default_service_factory(settings: Settings, client: AiohttpClient) -> EmailService:
    """Build an EmailService wired from settings."""
    return EmailService(
        create_transport(settings, client),
        sender=settings.sender,
        logger=get_logger("postbox.email"),
        retry_config=settings.retry_config(),
    )


def default_client_factory(settings: Settings) -> AiohttpClient:
    return AiohttpClient(timeout=settings.request_timeout)


class CLIState:
    """Application state container for CLI commands.

    Holds Settings and the factories commands use to build their
    dependencies; tests swap the factories for mocks.
    """

    def __init__(
        self,
        settings: Settings,
        service_factory: ServiceFactory = default_service_factory,
        client_factory: ClientFactory = default_client_factory,
    ):
        self.settings = settings
        self.service_factory = service_factory
        self.client_factory = client_factory

    @asynccontextmanager
    async def email_service(self) -> t.AsyncIterator[EmailService]:
        """Yield an EmailService backed by an open HTTP client."""
        async with self.client_factory(self.settings) as client:
            yield self.service_factory(self.settings, client)
