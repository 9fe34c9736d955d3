"""Display functions for CLI output."""

import typer
from pydantic import ValidationError

from ..domain.email import EmailType, SentEmail


def display_sent(email_type: EmailType, recipient: str, sent: SentEmail) -> None:
    """Display a successful send.

    Args:
        email_type: Kind of email sent
        recipient: Recipient address
        sent: Provider success payload
    """
    label = email_type.value.replace("_", " ")
    typer.secho(f"✓ Sent {label} email to {recipient}", fg=typer.colors.GREEN)
    typer.echo(f"  Id: {sent.id}")


def display_invalid_input(error: ValidationError) -> None:
    """Display pydantic validation failures, one line per field."""
    typer.secho("✗ Invalid input", fg=typer.colors.RED)
    for detail in error.errors():
        field = ".".join(str(part) for part in detail["loc"])
        typer.secho(f"  {field}: {detail['msg']}", fg=typer.colors.RED)


def display_delivery_failed(error: Exception) -> None:
    typer.secho("✗ Failed to send email", fg=typer.colors.RED)
    typer.secho(f"  Error: {error}", fg=typer.colors.RED)
