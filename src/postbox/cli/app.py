"""CLI application factory."""

from typing import Optional

import typer

from ..config.settings import LogLevel, Settings, build_settings
from ..infrastructure.logging import setup_logging
from .commands import send_password_reset, send_verification
from .state import CLIState


def create_cli_app(
    settings: Settings | None = None, state: CLIState | None = None
) -> typer.Typer:
    """Create CLI application with optional settings or state override.

    Args:
        settings: Optional Settings override for testing
        state: Optional CLIState override (takes precedence over settings)

    Returns:
        Configured Typer application with commands registered
    """
    app = typer.Typer(
        name="postbox",
        help="Postbox - transactional email delivery with retry and backoff",
        no_args_is_help=True,
    )

    @app.callback()
    def setup(
        ctx: typer.Context,
        verbose: bool = typer.Option(
            False,
            "--verbose",
            "-v",
            help="Enable verbose output (DEBUG logging)",
        ),
        dry_run: bool = typer.Option(
            False,
            "--dry-run",
            help="Build and record emails without contacting the provider",
        ),
        max_attempts: Optional[int] = typer.Option(
            None,
            "--max-attempts",
            help="Total delivery attempts per email",
            min=1,
        ),
    ) -> None:
        """Global options available to all commands."""
        if state is not None:
            resolved_state = state
        else:
            resolved_settings = settings or build_settings(
                log_level=LogLevel.DEBUG if verbose else None,
                dry_run=True if dry_run else None,
                retry_max_attempts=max_attempts,
            )
            resolved_state = CLIState(resolved_settings)

        setup_logging(resolved_state.settings)
        ctx.obj = resolved_state

    app.command("send-verification")(send_verification)
    app.command("send-password-reset")(send_password_reset)

    return app
