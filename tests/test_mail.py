"""Transactional email task tests."""

from unittest.mock import MagicMock, patch

from src.tasks import mail


def smtp_settings(**overrides):
    settings = MagicMock(
        smtp_host="smtp.example.com",
        smtp_port=587,
        smtp_username="mailer",
        smtp_password="secret",  # noqa: S106
        email_from_address="no-reply@example.com",
        app_url="https://app.example.com",
        password_reset_minutes=60,
    )
    for name, value in overrides.items():
        setattr(settings, name, value)
    return settings


def test_build_message():
    with patch("src.tasks.mail.get_settings", return_value=smtp_settings()):
        message = mail.build_message("owner@example.com", "Hello", "Body text")
    assert message["From"] == "no-reply@example.com"
    assert message["To"] == "owner@example.com"
    assert message["Subject"] == "Hello"
    assert "Body text" in message.get_content()


def test_deliver_skips_without_smtp_host():
    with patch("src.tasks.mail.get_settings", return_value=smtp_settings(smtp_host=None)):
        with patch("src.tasks.mail.smtplib.SMTP") as mock_smtp:
            message = mail.build_message("owner@example.com", "Hello", "Body")
            assert mail.deliver(message) is False
    mock_smtp.assert_not_called()


def test_deliver_sends_over_smtp():
    with patch("src.tasks.mail.get_settings", return_value=smtp_settings()):
        with patch("src.tasks.mail.smtplib.SMTP") as mock_smtp:
            message = mail.build_message("owner@example.com", "Hello", "Body")
            assert mail.deliver(message) is True

    mock_smtp.assert_called_once_with("smtp.example.com", 587, timeout=30)
    smtp = mock_smtp.return_value.__enter__.return_value
    smtp.starttls.assert_called_once()
    smtp.login.assert_called_once_with("mailer", "secret")
    smtp.send_message.assert_called_once_with(message)


def test_deliver_without_credentials_skips_login():
    settings = smtp_settings(smtp_username=None, smtp_password=None)
    with patch("src.tasks.mail.get_settings", return_value=settings):
        with patch("src.tasks.mail.smtplib.SMTP") as mock_smtp:
            mail.deliver(mail.build_message("owner@example.com", "Hello", "Body"))
    mock_smtp.return_value.__enter__.return_value.login.assert_not_called()


def test_welcome_email_task():
    with patch("src.tasks.mail.get_settings", return_value=smtp_settings()):
        with patch("src.tasks.mail.deliver", return_value=True) as mock_deliver:
            assert mail.send_welcome_email("owner@example.com", "Sam") is True

    message = mock_deliver.call_args.args[0]
    assert message["To"] == "owner@example.com"
    assert "Hi Sam," in message.get_content()
    assert "https://app.example.com/login" in message.get_content()


def test_password_reset_email_contains_link():
    with patch("src.tasks.mail.get_settings", return_value=smtp_settings()):
        with patch("src.tasks.mail.deliver", return_value=True) as mock_deliver:
            mail.send_password_reset_email("owner@example.com", None, "abc123")

    content = mock_deliver.call_args.args[0].get_content()
    assert content.startswith("Hi,")
    assert "https://app.example.com/reset-password?token=abc123" in content
    assert "60 minutes" in content
