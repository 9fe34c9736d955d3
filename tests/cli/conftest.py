"""Shared fixtures for CLI tests."""

import pytest

from postbox.cli.app import create_cli_app
from postbox.cli.state import CLIState, default_service_factory
from postbox.config.settings import Environment, LogLevel, Settings
from postbox.domain.email import SentEmail
from postbox.email import EmailService
from postbox.infrastructure.http import AiohttpClient


@pytest.fixture
def cli_settings():
    """Provide test Settings with known values."""
    return Settings(
        environment=Environment.TESTING,
        log_level=LogLevel.CRITICAL,
        dry_run=True,
        retry_initial_delay=0.0,
    )


@pytest.fixture
def stub_client_factory(mocker):
    """Client factory that borrows a mock session instead of opening one."""

    def factory(settings):
        return AiohttpClient(session=mocker.Mock())

    return factory


@pytest.fixture
def mock_email_service(mocker):
    """Provide fully mocked EmailService with spec for type safety."""
    service = mocker.AsyncMock(spec=EmailService)
    service.send_verification_email.return_value = SentEmail(id="email-123")
    service.send_password_reset_email.return_value = SentEmail(id="email-456")
    return service


@pytest.fixture
def cli_state_with_mock_service(cli_settings, mock_email_service, stub_client_factory):
    """CLIState that hands out the mocked service."""

    def mock_service_factory(settings, client):
        return mock_email_service

    return CLIState(
        cli_settings,
        service_factory=mock_service_factory,
        client_factory=stub_client_factory,
    )


@pytest.fixture
def app_with_mock_service(cli_state_with_mock_service):
    """CLI app with mocked service factory for testing."""
    return create_cli_app(state=cli_state_with_mock_service)


@pytest.fixture
def dry_run_state(cli_settings, stub_client_factory):
    """CLIState wired with the real service over a memory transport."""
    return CLIState(
        cli_settings,
        service_factory=default_service_factory,
        client_factory=stub_client_factory,
    )


@pytest.fixture
def default_app():
    """Provide CLI app with default settings."""
    return create_cli_app()
