"""
SMTP mailer for the public contact form.

Each submission produces two messages: a notification to the site owner and a
confirmation back to the sender. Both carry a plain-text body and an HTML
alternative; user input is escaped before it goes into the HTML part.
"""
from __future__ import annotations

import html
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional

from src.app.config import Settings, settings as default_settings
from src.services.errors import MailDeliveryError, MailNotConfiguredError

logger = logging.getLogger(__name__)


@dataclass
class ContactMessage:
    name: str
    email: str
    subject: str
    message: str


def _html_paragraph(text: str) -> str:
    return html.escape(text).replace("\n", "<br>")


def build_admin_notification(contact: ContactMessage, sender: str, owner: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = owner
    msg["Reply-To"] = contact.email
    msg["Subject"] = f"Portfolio Contact: {contact.subject}"
    msg.set_content(
        "New Contact Form Submission\n\n"
        f"Name: {contact.name}\n"
        f"Email: {contact.email}\n"
        f"Subject: {contact.subject}\n\n"
        f"Message:\n{contact.message}\n"
    )
    msg.add_alternative(
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h2>New Contact Form Submission</h2>"
        f"<p><strong>Name:</strong> {html.escape(contact.name)}</p>"
        f"<p><strong>Email:</strong> {html.escape(contact.email)}</p>"
        f"<p><strong>Subject:</strong> {html.escape(contact.subject)}</p>"
        "<h3>Message:</h3>"
        f"<p>{_html_paragraph(contact.message)}</p>"
        '<p style="color: #999; font-size: 12px;">'
        "This email was sent from your portfolio contact form.</p>"
        "</div>",
        subtype="html",
    )
    return msg


def build_confirmation(contact: ContactMessage, sender: str, signature: str) -> EmailMessage:
    msg = EmailMessage()
    msg["From"] = sender
    msg["To"] = contact.email
    msg["Subject"] = f"Thanks for reaching out, {contact.name}!"
    msg.set_content(
        f"Hi {contact.name},\n\n"
        "Thanks for reaching out! We've received your message and will get back "
        "to you as soon as possible.\n\n"
        "Your message:\n"
        f"Subject: {contact.subject}\n"
        f"{contact.message}\n\n"
        f"Best regards,\n{signature}\n"
    )
    msg.add_alternative(
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        "<h2>Thanks for contacting us!</h2>"
        f"<p>Hi {html.escape(contact.name)},</p>"
        "<p>We've received your message and will get back to you as soon as possible.</p>"
        "<h3>Your message:</h3>"
        f"<p><strong>Subject:</strong> {html.escape(contact.subject)}</p>"
        f"<p>{_html_paragraph(contact.message)}</p>"
        f"<p>Best regards,<br>{html.escape(signature)}</p>"
        "</div>",
        subtype="html",
    )
    return msg


class SmtpMailer:
    def __init__(self, config: Optional[Settings] = None) -> None:
        self.config = config or default_settings

    def _check_configured(self) -> None:
        missing = [
            key for key in ("SMTP_HOST", "SMTP_USER", "FROM_EMAIL")
            if not getattr(self.config, key)
        ]
        if missing:
            raise MailNotConfiguredError(f"Mail is not configured. Missing: {', '.join(missing)}")

    def send_contact(self, contact: ContactMessage) -> None:
        self._check_configured()
        cfg = self.config
        messages = [
            build_admin_notification(contact, sender=cfg.FROM_EMAIL, owner=cfg.SMTP_USER),
            build_confirmation(contact, sender=cfg.FROM_EMAIL, signature=cfg.CONTACT_SIGNATURE),
        ]

        current_recipient = cfg.SMTP_USER
        try:
            with smtplib.SMTP(cfg.SMTP_HOST, cfg.SMTP_PORT, timeout=30) as smtp:
                if cfg.SMTP_USE_TLS:
                    smtp.starttls()
                if cfg.SMTP_PASSWORD is not None:
                    smtp.login(cfg.SMTP_USER, cfg.SMTP_PASSWORD.get_secret_value())
                for msg in messages:
                    current_recipient = msg["To"]
                    smtp.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("SMTP delivery failed for %s: %s", current_recipient, e)
            raise MailDeliveryError(current_recipient, str(e)) from e

        logger.info("Contact form mail sent: from=%s, subject=%r", contact.email, contact.subject)
