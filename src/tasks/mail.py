"""Celery tasks for transactional email."""

import logging
import smtplib
from email.message import EmailMessage

from src.celery_app import app as celery_app
from src.config import get_settings

logger = logging.getLogger(__name__)


def build_message(to: str, subject: str, body: str) -> EmailMessage:
    settings = get_settings()
    message = EmailMessage()
    message["From"] = settings.email_from_address
    message["To"] = to
    message["Subject"] = subject
    message.set_content(body)
    return message


def deliver(message: EmailMessage) -> bool:
    """Send over SMTP. Returns False when SMTP is not configured."""
    settings = get_settings()
    if not settings.smtp_host:
        logger.info(f"SMTP not configured, skipping email to {message['To']}: {message['Subject']}")
        return False

    with smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=30) as smtp:
        smtp.starttls()
        if settings.smtp_username and settings.smtp_password:
            smtp.login(settings.smtp_username, settings.smtp_password)
        smtp.send_message(message)
    logger.info(f"Sent email to {message['To']}: {message['Subject']}")
    return True


@celery_app.task(autoretry_for=(smtplib.SMTPException, OSError), retry_backoff=True, max_retries=3)
def send_welcome_email(email: str, name: str | None) -> bool:
    """Welcome message sent after registration."""
    greeting = f"Hi {name}," if name else "Hi,"
    body = (
        f"{greeting}\n\n"
        "Thanks for registering your restaurant with us. "
        f"You can sign in at {get_settings().app_url}/login to finish setting up.\n"
    )
    return deliver(build_message(email, "Welcome aboard", body))


@celery_app.task(autoretry_for=(smtplib.SMTPException, OSError), retry_backoff=True, max_retries=3)
def send_password_reset_email(email: str, name: str | None, token: str) -> bool:
    """Password reset link, valid for the configured window."""
    settings = get_settings()
    link = f"{settings.app_url}/reset-password?token={token}"
    greeting = f"Hi {name}," if name else "Hi,"
    body = (
        f"{greeting}\n\n"
        "We received a request to reset your password. Use the link below within "
        f"{settings.password_reset_minutes} minutes:\n\n{link}\n\n"
        "If you did not request this, you can ignore this email.\n"
    )
    return deliver(build_message(email, "Reset your password", body))
