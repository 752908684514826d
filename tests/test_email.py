import asyncio

import pytest

from melodyverse.core.config import settings
from melodyverse.services import email as email_service


def test_send_password_reset_email_requires_smtp():
    with pytest.raises(ValueError, match="SMTP is not configured"):
        asyncio.run(email_service.send_password_reset_email("a@x.com", "token123"))


def test_reset_message_links_to_frontend(monkeypatch):
    monkeypatch.setattr(settings, "frontend_url", "https://melodyverse.example.com/")
    message = email_service.build_password_reset_message("a@x.com", "token123")
    assert message["To"] == "a@x.com"
    plain = message.get_payload()[0].get_payload()
    assert "https://melodyverse.example.com/reset-password/token123" in plain


def test_reset_message_without_frontend_includes_token(monkeypatch):
    monkeypatch.setattr(settings, "frontend_url", None)
    message = email_service.build_password_reset_message("a@x.com", "token123")
    plain = message.get_payload()[0].get_payload()
    assert "token123" in plain
    assert "reset-password/" not in plain


def test_send_password_reset_email_uses_starttls(monkeypatch):
    monkeypatch.setattr(settings, "smtp_host", "smtp.example.com")
    monkeypatch.setattr(settings, "smtp_port", 587)
    monkeypatch.setattr(settings, "smtp_user", "mailer")
    monkeypatch.setattr(settings, "smtp_password", "pw")
    monkeypatch.setattr(settings, "smtp_from_email", "noreply@example.com")
    sent = {}

    async def fake_send(message, **kwargs):
        sent["message"] = message
        sent.update(kwargs)

    monkeypatch.setattr(email_service.aiosmtplib, "send", fake_send)
    asyncio.run(email_service.send_password_reset_email("a@x.com", "token123"))

    assert sent["hostname"] == "smtp.example.com"
    assert sent["start_tls"] is True
    assert sent["message"]["From"] == "noreply@example.com"
