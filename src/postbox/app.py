"""Application wiring."""

from dataclasses import dataclass

from .config.settings import Settings
from .infrastructure.logging import setup_logging


@dataclass(frozen=True)
class App:
    """Container for process-wide state, currently just `Settings`."""

    settings: Settings


def create_app(settings: Settings | None = None) -> App:
    """Build an `App` and configure logging from its settings.

    Falls back to `Settings()`, i.e. environment variables and `.env`.
    """
    settings = settings or Settings()
    setup_logging(settings)
    return App(settings=settings)
