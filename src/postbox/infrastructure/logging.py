"""Logging configuration built on loguru.

Components take an injected ``loguru.Logger``; ``get_logger`` hands out the
shared logger bound to a module name and configures it on first use.

Development output is a colourised single-line format. Production and
testing emit JSON lines (``serialize=True``) so structured extras passed
as keyword arguments, e.g. ``logger.warning(msg, event="email_retry_attempt")``,
land as fields on the record.
"""

import sys
import typing as t

from loguru import logger

from ..config.settings import Environment, LogLevel, Settings

if t.TYPE_CHECKING:
    import loguru

_DEVELOPMENT_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> "
    "<level>{level: <8}</level> "
    "<cyan>{extra[name]}</cyan> - <level>{message}</level>"
)

_configured = False


def configure_logger(
    level: LogLevel = LogLevel.INFO,
    environment: Environment = Environment.PRODUCTION,
) -> None:
    """Replace loguru's sinks with the one for ``environment``.

    Args:
        level: Minimum level emitted
        environment: Selects human-readable or JSON output
    """
    global _configured

    logger.remove()
    logger.configure(extra={"name": "postbox"})

    if environment == Environment.DEVELOPMENT:
        logger.add(
            sys.stderr,
            level=level.value,
            format=_DEVELOPMENT_FORMAT,
            colorize=True,
            backtrace=True,
            diagnose=True,
        )
    else:
        logger.add(
            sys.stderr,
            level=level.value,
            serialize=True,
            backtrace=False,
            diagnose=False,
        )

    _configured = True


def setup_logging(settings: Settings) -> None:
    """Configure logging from application settings."""
    configure_logger(level=settings.log_level, environment=settings.environment)


def get_logger(name: str) -> "loguru.Logger":
    """Return the shared logger bound to ``name``.

    Configures logging with defaults when nothing has configured it yet.
    """
    if not _configured:
        configure_logger()
    return logger.bind(name=name)


def is_configured() -> bool:
    return _configured


def reset_logging() -> None:
    """Remove all sinks and mark logging as unconfigured."""
    global _configured

    logger.remove()
    _configured = False
