import logging
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import aiosmtplib

from melodyverse.core.config import settings

logger = logging.getLogger(__name__)


def smtp_configured() -> bool:
    return all([
        settings.smtp_host,
        settings.smtp_port,
        settings.smtp_user,
        settings.smtp_password,
        settings.smtp_from_email,
    ])


def build_password_reset_message(email: str, reset_token: str) -> MIMEMultipart:
    """Build the multipart (plain + HTML) password reset email."""
    expire_minutes = settings.password_reset_token_expire_minutes

    message = MIMEMultipart("alternative")
    message["Subject"] = "Reset your MelodyVerse password"
    message["From"] = settings.smtp_from_email or ""
    message["To"] = email

    if settings.frontend_url:
        # The frontend serves the reset form at /reset-password/:token
        reset_link = f"{settings.frontend_url.rstrip('/')}/reset-password/{reset_token}"
        text = f"""
You requested a password reset for your MelodyVerse account.

Please open the following link to choose a new password:
{reset_link}

This link will expire in {expire_minutes} minutes.

If you did not request this, please ignore this email.
        """
        html = f"""
<html>
  <body>
    <p>You requested a password reset for your MelodyVerse account.</p>
    <p>Please open the following link to choose a new password:</p>
    <p><a href="{reset_link}">{reset_link}</a></p>
    <p>This link will expire in {expire_minutes} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
        """
    else:
        text = f"""
You requested a password reset for your MelodyVerse account.

Your password reset token is:
{reset_token}

This token will expire in {expire_minutes} minutes.

If you did not request this, please ignore this email.
        """
        html = f"""
<html>
  <body>
    <p>You requested a password reset for your MelodyVerse account.</p>
    <p>Your password reset token is:</p>
    <p><code>{reset_token}</code></p>
    <p>This token will expire in {expire_minutes} minutes.</p>
    <p>If you did not request this, please ignore this email.</p>
  </body>
</html>
        """

    message.attach(MIMEText(text, "plain"))
    message.attach(MIMEText(html, "html"))
    return message


async def send_password_reset_email(email: str, reset_token: str) -> None:
    """
    Send password reset email to user.

    Args:
        email: User's email address
        reset_token: Plaintext reset token

    Raises:
        ValueError: If SMTP is not configured.
        aiosmtplib.SMTPException: If the SMTP server rejects the message.
    """
    if not smtp_configured():
        logger.warning("SMTP not configured - cannot send password reset email")
        raise ValueError("SMTP is not configured. Please configure SMTP settings in .env file.")

    message = build_password_reset_message(email, reset_token)

    send_kwargs = {
        "hostname": settings.smtp_host,
        "port": settings.smtp_port,
        "username": settings.smtp_user,
        "password": settings.smtp_password,
    }

    # Port 465 uses implicit TLS, anything else STARTTLS
    if settings.smtp_use_tls:
        if settings.smtp_port == 465:
            send_kwargs["use_tls"] = True
        else:
            send_kwargs["start_tls"] = True

    await aiosmtplib.send(message, **send_kwargs)
    logger.info("Password reset email sent")
