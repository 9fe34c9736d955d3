"""Pytest configuration and fixtures for postbox tests."""

import typing as t

import loguru
import pytest
from blockbuster import BlockBuster, blockbuster_ctx
from typer.testing import CliRunner

from postbox.app import create_app
from postbox.config.settings import Environment, LogLevel, Settings
from postbox.email import MemoryTransport
from postbox.events import BaseEmitter, EventEmitter
from postbox.infrastructure.logging import reset_logging


@pytest.fixture(autouse=True)
def blockbuster() -> t.Iterator[BlockBuster]:
    """Fail any test where postbox code blocks the running event loop."""
    with blockbuster_ctx(
        scanned_modules=["postbox"],
    ) as bb:
        # certifi resolves its CA bundle path with os.path.abspath
        bb.functions["os.path.abspath"].deactivate()

        yield bb


@pytest.fixture
def test_settings():
    """Testing environment, no provider key, only CRITICAL logs."""
    return Settings(environment=Environment.TESTING, log_level=LogLevel.CRITICAL)


@pytest.fixture
def test_app(test_settings):
    """App built from test_settings, logging reset around it."""
    reset_logging()
    app = create_app(settings=test_settings)
    yield app
    reset_logging()


@pytest.fixture(autouse=True)
def clean_logging_state():
    """Start and finish every test with loguru unconfigured."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def mock_logger(mocker):
    """Logger double; assert on .error/.warning calls and their extras."""
    return mocker.Mock(spec=loguru.logger)


@pytest.fixture
def mock_emitter(mocker):
    """Emitter double; emit is async so await assertions work."""
    return mocker.Mock(spec=BaseEmitter)


@pytest.fixture
def real_emitter(mock_logger):
    """EventEmitter for tests that subscribe real handlers."""
    return EventEmitter(mock_logger)


@pytest.fixture
def memory_transport():
    """Provide an in-memory transport that records sent messages."""
    return MemoryTransport()


@pytest.fixture
def sleeps():
    """Record of delays requested from the fake sleep."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    """Async sleep replacement that records the delay and returns at once."""

    async def sleep(delay: float) -> None:
        sleeps.append(delay)

    return sleep


@pytest.fixture
def cli_runner():
    """Provide Typer CLI test runner."""
    return CliRunner()
