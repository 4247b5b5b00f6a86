"""Transactional email templates for newsletter and contact flows.

Every ``send_*`` method returns ``True`` when the provider accepted the
message and ``False`` otherwise. Delivery problems are logged and never
propagate: emails are a side effect of the request, not its outcome.
"""

from __future__ import annotations

import html
import logging
import os
from datetime import datetime, timezone
from typing import Mapping, Optional

from fastapi import Request

from .notifications import NotificationClient, build_email_client_from_env

LOGGER = logging.getLogger(__name__)

LOGO_URL = "https://res.cloudinary.com/dwpkrvrfk/image/upload/v1769959139/logo_l2ja8n.png"
NEWSLETTER_FOOTER = "BioMed Newsletter | Medical Education Platform"


def _layout(body: str, footer: str) -> str:
    return (
        '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">'
        '<div style="text-align: center; margin-bottom: 30px;">'
        f'<img src="{LOGO_URL}" alt="BioMed Logo" style="max-width: 150px; height: auto;">'
        "</div>"
        f"{body}"
        '<hr style="margin: 30px 0;">'
        f'<p style="font-size: 12px; color: #666;">{footer}</p>'
        "</div>"
    )


def _escape(value: object) -> str:
    return html.escape("" if value is None else str(value))


class Mailer:
    """Compose and send the platform's transactional emails."""

    def __init__(
        self,
        client: NotificationClient,
        *,
        admin_email: Optional[str] = None,
        support_email: Optional[str] = None,
        support_phone: Optional[str] = None,
    ) -> None:
        self.client = client
        self.admin_email = admin_email
        self.support_email = support_email
        self.support_phone = support_phone

    @classmethod
    def from_env(cls) -> "Mailer":
        return cls(
            build_email_client_from_env(),
            admin_email=os.getenv("ADMIN_EMAIL"),
            support_email=os.getenv("SUPPORT_EMAIL"),
            support_phone=os.getenv("SUPPORT_PHONE"),
        )

    def _deliver(self, kind: str, destination: str, subject: str, plain_text: str, html_text: str) -> bool:
        try:
            result = self.client.send_message(
                destination=destination,
                subject=subject,
                plain_text=plain_text,
                html_text=html_text,
            )
        except Exception:
            LOGGER.exception("Error sending %s email to %s", kind, destination)
            return False

        if not result.success:
            LOGGER.warning(
                "Provider rejected %s email to %s (status=%s): %s",
                kind,
                destination,
                result.status_code,
                result.error,
            )
            return False

        LOGGER.info("%s email sent to %s", kind.capitalize(), destination)
        return True

    def send_confirmation(self, email: str, confirmation_link: str) -> bool:
        link = _escape(confirmation_link)
        body = (
            "<h2>Welcome to BioMed Newsletter!</h2>"
            "<p>Thank you for subscribing to our newsletter. We're excited to have you on board!</p>"
            "<p>Please confirm your email address by clicking the button below:</p>"
            '<div style="text-align: center; margin: 30px 0;">'
            f'<a href="{link}" style="background-color: #007bff; color: white; padding: 12px 30px; '
            'text-decoration: none; border-radius: 5px; display: inline-block;">Confirm Email Address</a>'
            "</div>"
            "<p>Or copy and paste this link in your browser:</p>"
            f'<p><a href="{link}">{link}</a></p>'
            "<p>This link will expire in 24 hours.</p>"
        )
        footer = "If you didn't subscribe to this newsletter, please ignore this email.<br>" + NEWSLETTER_FOOTER
        plain = (
            "Welcome to BioMed Newsletter!\n\n"
            f"Please confirm your email by visiting:\n{confirmation_link}\n\n"
            "This link will expire in 24 hours."
        )
        return self._deliver(
            "confirmation",
            email,
            "Welcome to BioMed Newsletter - Confirm Your Subscription",
            plain,
            _layout(body, footer),
        )

    def send_welcome(self, email: str) -> bool:
        body = (
            "<h2>Welcome to BioMed!</h2>"
            "<p>Your email has been confirmed. You're now subscribed to our newsletter.</p>"
            "<p>You'll receive:</p>"
            "<ul>"
            "<li>Latest medical research and insights</li>"
            "<li>Educational articles and tutorials</li>"
            "<li>Course updates and announcements</li>"
            "<li>Exclusive member-only content</li>"
            "</ul>"
            "<p>Thank you for being part of our community!</p>"
        )
        return self._deliver(
            "welcome",
            email,
            "You're All Set! Welcome to BioMed Newsletter",
            "Welcome to BioMed! You are now subscribed to our newsletter.",
            _layout(body, NEWSLETTER_FOOTER),
        )

    def send_unsubscribe(self, email: str) -> bool:
        body = (
            "<h2>Unsubscribe Confirmation</h2>"
            "<p>You have been unsubscribed from the BioMed Newsletter.</p>"
            "<p>We're sorry to see you go! If you change your mind, you can resubscribe anytime.</p>"
        )
        return self._deliver(
            "unsubscribe",
            email,
            "You've Been Unsubscribed from BioMed Newsletter",
            "You have been unsubscribed from the BioMed Newsletter.",
            _layout(body, NEWSLETTER_FOOTER),
        )

    def send_contact_confirmation(self, email: str, full_name: str) -> bool:
        body = (
            "<h2>Thank You for Contacting BioMed!</h2>"
            f"<p>Dear {_escape(full_name)},</p>"
            "<p>We have received your message and appreciate you reaching out to us.</p>"
            "<p>Our support team will review your inquiry and get back to you as soon as possible.</p>"
        )
        if self.support_email or self.support_phone:
            body += (
                "<p>In the meantime, if you have any urgent questions, please feel free to contact us at:</p>"
                '<p style="margin: 20px 0;">'
                f"<strong>Email:</strong> {_escape(self.support_email or '')}<br>"
                f"<strong>Phone:</strong> {_escape(self.support_phone or '')}"
                "</p>"
            )
        plain = (
            "Thank you for contacting BioMed!\n\n"
            "We have received your message and will get back to you soon.\n\n"
            "Support Team"
        )
        return self._deliver(
            "contact confirmation",
            email,
            "We Received Your Message - BioMed Support",
            plain,
            _layout(body, "BioMed Support Team | Medical Education Platform"),
        )

    def send_contact_admin_notification(self, contact: Mapping[str, object]) -> bool:
        if not self.admin_email:
            LOGGER.info("ADMIN_EMAIL is not configured; skipping contact notification")
            return False

        submitted = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
        phone = f"{contact.get('country_code') or ''} {contact.get('phone_number') or 'Not provided'}".strip()
        rows = (
            ("Name", _escape(contact.get("full_name"))),
            (
                "Email",
                f'<a href="mailto:{_escape(contact.get("email"))}">{_escape(contact.get("email"))}</a>',
            ),
            ("Phone", _escape(phone)),
            ("Topic", _escape(contact.get("interest_topic") or "Not specified")),
            ("Message", _escape(contact.get("message"))),
            ("Submitted", submitted),
        )
        table = "".join(
            '<tr style="border-bottom: 1px solid #ddd;">'
            f'<td style="padding: 10px; font-weight: bold; width: 30%;">{label}:</td>'
            f'<td style="padding: 10px; white-space: pre-wrap;">{value}</td>'
            "</tr>"
            for label, value in rows
        )
        body = (
            "<h2>New Contact Form Submission</h2>"
            f'<table style="width: 100%; border-collapse: collapse;">{table}</table>'
        )
        plain = (
            "New Contact Form Submission\n\n"
            f"Name: {contact.get('full_name')}\n"
            f"Email: {contact.get('email')}\n"
            f"Phone: {phone}\n"
            f"Topic: {contact.get('interest_topic') or 'Not specified'}\n"
            f"Message: {contact.get('message')}"
        )
        footer = "This is an automated notification. Please log into the admin panel to manage this inquiry."
        return self._deliver(
            "admin notification",
            self.admin_email,
            f"New Contact Form Submission from {contact.get('full_name')}",
            plain,
            _layout(body, footer),
        )


def get_mailer(request: Request) -> Mailer:
    """Dependency returning the mailer configured during application startup."""
    return request.app.state.mailer
