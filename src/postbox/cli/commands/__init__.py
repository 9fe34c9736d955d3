"""CLI commands."""

from .send import send_password_reset, send_verification

__all__ = ["send_verification", "send_password_reset"]
