"""Subjects and bodies for transactional emails.

Bodies are plain formatted strings; user-supplied values are HTML-escaped.
"""

from html import escape

from ..domain.email import PasswordResetEmailRequest, VerificationEmailRequest

VERIFICATION_SUBJECT = "Verify your email address"
PASSWORD_RESET_SUBJECT = "Reset your password"


def verification_content(request: VerificationEmailRequest) -> tuple[str, str]:
    """Return ``(html, text)`` for a verification email."""
    url = str(request.verification_url)
    html = (
        f"<p>Hi {escape(request.user_name)},</p>"
        "<p>Confirm your email address to finish setting up your account.</p>"
        f'<p><a href="{escape(url)}">Verify email</a></p>'
        "<p>If you did not create an account, you can ignore this email.</p>"
    )
    text = (
        f"Hi {request.user_name},\n\n"
        "Confirm your email address to finish setting up your account:\n"
        f"{url}\n\n"
        "If you did not create an account, you can ignore this email.\n"
    )
    return html, text


def password_reset_content(request: PasswordResetEmailRequest) -> tuple[str, str]:
    """Return ``(html, text)`` for a password reset email."""
    url = str(request.reset_url)
    html = (
        f"<p>Hi {escape(request.user_name)},</p>"
        "<p>We received a request to reset your password.</p>"
        f'<p><a href="{escape(url)}">Reset password</a></p>'
        "<p>If you did not request this, you can ignore this email.</p>"
    )
    text = (
        f"Hi {request.user_name},\n\n"
        "We received a request to reset your password:\n"
        f"{url}\n\n"
        "If you did not request this, you can ignore this email.\n"
    )
    return html, text
