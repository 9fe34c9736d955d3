"""Send commands: verification and password reset emails."""

import asyncio
import typing as t
from typing import Optional

import typer
from pydantic import ValidationError

from ...domain.email import EmailType, SentEmail
from ...domain.exceptions import PostboxError
from ...email import EmailService
from ..output import display_delivery_failed, display_invalid_input, display_sent
from ..state import CLIState

SendCall = t.Callable[[EmailService], t.Awaitable[SentEmail]]


def _run_send(
    state: CLIState, email_type: EmailType, recipient: str, call: SendCall
) -> None:
    """Run ``call`` against a fresh service and report the outcome.

    Raises:
        typer.Exit: On invalid input or delivery failure
    """

    async def run() -> SentEmail:
        async with state.email_service() as service:
            return await call(service)

    try:
        sent = asyncio.run(run())
    except ValidationError as e:
        display_invalid_input(e)
        raise typer.Exit(code=1)
    except PostboxError as e:
        display_delivery_failed(e)
        raise typer.Exit(code=1)

    display_sent(email_type, recipient, sent)


def send_verification(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Recipient email address"),
    name: str = typer.Option(..., "--name", "-n", help="Recipient display name"),
    url: str = typer.Option(..., "--url", "-u", help="Verification link"),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Owning user id"),
) -> None:
    """Send an email address verification email.

    Examples:
        postbox send-verification ada@example.com --name Ada --url https://app.example.com/verify?token=abc
    """
    state: CLIState = ctx.obj
    _run_send(
        state,
        EmailType.VERIFICATION,
        email,
        lambda service: service.send_verification_email(
            email, name, url, user_id=user_id
        ),
    )


def send_password_reset(
    ctx: typer.Context,
    email: str = typer.Argument(..., help="Recipient email address"),
    name: str = typer.Option(..., "--name", "-n", help="Recipient display name"),
    url: str = typer.Option(..., "--url", "-u", help="Password reset link"),
    user_id: Optional[str] = typer.Option(None, "--user-id", help="Owning user id"),
) -> None:
    """Send a password reset email.

    Examples:
        postbox send-password-reset ada@example.com --name Ada --url https://app.example.com/reset?token=abc
    """
    state: CLIState = ctx.obj
    _run_send(
        state,
        EmailType.PASSWORD_RESET,
        email,
        lambda service: service.send_password_reset_email(
            email, name, url, user_id=user_id
        ),
    )
