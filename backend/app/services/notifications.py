"""Outbound email providers used for transactional notifications."""

from __future__ import annotations

import abc
import logging
import os
from dataclasses import dataclass
from typing import Optional

import httpx

from ..database import read_bool_env
from ..errors import ConfigurationError, UpstreamError

LOGGER = logging.getLogger(__name__)

EMAIL_PROVIDER_ENV = "EMAIL_PROVIDER"
DEFAULT_SENDER_NAME = "BioMed"


class NotificationError(UpstreamError):
    """Raised when the email provider cannot be reached."""


@dataclass
class NotificationResult:
    """Outcome returned by a notification provider."""

    success: bool
    status_code: Optional[int] = None
    provider_message_id: Optional[str] = None
    error: Optional[str] = None


class NotificationClient(abc.ABC):
    """Interface implemented by outbound notification providers."""

    channel: str

    @abc.abstractmethod
    def send_message(
        self,
        *,
        destination: str,
        subject: str,
        plain_text: str,
        html_text: str | None = None,
    ) -> NotificationResult:
        """Send a message to the destination and return the delivery result."""


class ConsoleNotificationClient(NotificationClient):
    """Client that records messages in memory and logs them instead of sending."""

    channel = "console"

    def __init__(self) -> None:
        self.records: list[dict[str, str]] = []

    def send_message(
        self,
        *,
        destination: str,
        subject: str,
        plain_text: str,
        html_text: str | None = None,
    ) -> NotificationResult:
        payload = {
            "destination": destination,
            "subject": subject,
            "plain_text": plain_text,
            "html_text": html_text or "",
        }
        self.records.append(payload)
        LOGGER.info("[console] Email to %s: %s", destination, subject)
        return NotificationResult(success=True, status_code=200, provider_message_id="console")


def _response_result(response: httpx.Response, message_id: Optional[str]) -> NotificationResult:
    if response.status_code >= 400:
        return NotificationResult(
            success=False,
            status_code=response.status_code,
            error=response.text,
        )
    return NotificationResult(
        success=True,
        status_code=response.status_code,
        provider_message_id=message_id,
    )


class BrevoEmailClient(NotificationClient):
    """Send transactional emails through the Brevo REST API."""

    channel = "email"
    endpoint = "https://api.brevo.com/v3/smtp/email"

    def __init__(
        self,
        *,
        api_key: str | None,
        sender_email: str | None,
        sender_name: str | None = None,
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("BREVO_API_KEY is required to send email through Brevo")
        if not sender_email:
            raise ConfigurationError("EMAIL_FROM_ADDRESS is required to send email")
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name or DEFAULT_SENDER_NAME
        self.timeout = timeout

    def send_message(
        self,
        *,
        destination: str,
        subject: str,
        plain_text: str,
        html_text: str | None = None,
    ) -> NotificationResult:
        headers = {
            "api-key": self.api_key,
            "accept": "application/json",
            "Content-Type": "application/json",
        }
        payload: dict[str, object] = {
            "sender": {"email": self.sender_email, "name": self.sender_name},
            "to": [{"email": destination}],
            "subject": subject,
            "textContent": plain_text,
        }
        if html_text:
            payload["htmlContent"] = html_text

        try:
            response = httpx.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:  # pragma: no cover - network failure
            raise NotificationError(f"Network error contacting Brevo: {exc}") from exc

        message_id = None
        if response.status_code < 400:
            try:
                message_id = response.json().get("messageId")
            except ValueError:
                message_id = None
        return _response_result(response, message_id)


class SendGridEmailClient(NotificationClient):
    """Send transactional emails using the SendGrid REST API."""

    channel = "email"
    endpoint = "https://api.sendgrid.com/v3/mail/send"

    def __init__(
        self,
        *,
        api_key: str | None,
        sender_email: str | None,
        sender_name: str | None = None,
        sandbox_mode: bool = False,
        timeout: float = 10.0,
    ) -> None:
        if not api_key:
            raise ConfigurationError("SENDGRID_API_KEY is required to send email through SendGrid")
        if not sender_email:
            raise ConfigurationError("EMAIL_FROM_ADDRESS is required to send email")
        self.api_key = api_key
        self.sender_email = sender_email
        self.sender_name = sender_name or DEFAULT_SENDER_NAME
        self.sandbox_mode = sandbox_mode
        self.timeout = timeout

    def send_message(
        self,
        *,
        destination: str,
        subject: str,
        plain_text: str,
        html_text: str | None = None,
    ) -> NotificationResult:
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }
        content = [{"type": "text/plain", "value": plain_text}]
        if html_text:
            content.append({"type": "text/html", "value": html_text})

        payload: dict[str, object] = {
            "personalizations": [{"to": [{"email": destination}]}],
            "from": {"email": self.sender_email, "name": self.sender_name},
            "subject": subject,
            "content": content,
        }
        if self.sandbox_mode:
            payload["mail_settings"] = {"sandbox_mode": {"enable": True}}

        try:
            response = httpx.post(
                self.endpoint,
                headers=headers,
                json=payload,
                timeout=self.timeout,
            )
        except httpx.HTTPError as exc:  # pragma: no cover - network failure
            raise NotificationError(f"Network error contacting SendGrid: {exc}") from exc

        return _response_result(response, response.headers.get("x-message-id"))


def build_email_client_from_env() -> NotificationClient:
    """Instantiate the email client selected by ``EMAIL_PROVIDER``.

    Missing credentials for an explicitly selected provider raise
    :class:`ConfigurationError` so the application refuses to start.
    """

    provider = os.getenv(EMAIL_PROVIDER_ENV, "console").strip().lower()
    sender_email = os.getenv("EMAIL_FROM_ADDRESS")
    sender_name = os.getenv("EMAIL_FROM_NAME")

    if provider == "brevo":
        return BrevoEmailClient(
            api_key=os.getenv("BREVO_API_KEY"),
            sender_email=sender_email,
            sender_name=sender_name,
        )
    if provider == "sendgrid":
        return SendGridEmailClient(
            api_key=os.getenv("SENDGRID_API_KEY"),
            sender_email=sender_email,
            sender_name=sender_name,
            sandbox_mode=read_bool_env("SENDGRID_SANDBOX_MODE"),
        )
    if provider != "console":
        raise ConfigurationError(
            f"Unsupported {EMAIL_PROVIDER_ENV}={provider!r}; use brevo, sendgrid or console"
        )

    LOGGER.info("Email provider not configured; messages are logged to the console")
    return ConsoleNotificationClient()
