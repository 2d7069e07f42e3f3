"""SendGridMailer: async client for the SendGrid v3 mail-send endpoint.

Usage::

    from carbonprospect.config import get_settings
    from carbonprospect.mail.client import SendGridMailer

    async with SendGridMailer(get_settings()) as mailer:
        await mailer.send(
            to="cfo@example.com",
            subject="GHG Emissions Report",
            body="Please find the report attached.",
            attachment=pdf_bytes,
            filename="Carbon_Emissions_Report_Acme_2026-10-19.pdf",
        )

Failures
--------
- 401 / 403 raise MailerAuthError (bad or revoked API key).
- Any other non-2xx response raises httpx.HTTPStatusError.
- Nothing is retried; callers decide whether to try again.
"""
from __future__ import annotations

import base64
import logging

import httpx

from carbonprospect.config import Settings

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class MailerAuthError(Exception):
    """Raised on HTTP 401/403 from the mail provider."""


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class SendGridMailer:
    """Async HTTP client that sends one message with one PDF attachment.

    Intended to be used as an async context manager so that the underlying
    httpx.AsyncClient is always properly closed.
    """

    SEND_PATH = "/v3/mail/send"

    def __init__(self, settings: Settings) -> None:
        self._sender = settings.email_from
        self._client = httpx.AsyncClient(
            base_url=settings.sendgrid_base_url,
            headers={"Authorization": f"Bearer {settings.sendgrid_api_key}"},
            timeout=httpx.Timeout(connect=10.0, read=30.0, write=30.0, pool=10.0),
        )

    async def __aenter__(self) -> "SendGridMailer":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self._client.aclose()

    async def send(
        self,
        to: str,
        subject: str,
        body: str,
        attachment: bytes,
        filename: str,
    ) -> None:
        """Send *attachment* as a PDF to *to*.

        Raises:
            MailerAuthError: The provider rejected the API key.
            httpx.HTTPStatusError: Any other non-2xx response.
        """
        payload = {
            "personalizations": [{"to": [{"email": to}]}],
            "from": {"email": self._sender},
            "subject": subject,
            "content": [{"type": "text/plain", "value": body}],
            "attachments": [
                {
                    "content": base64.b64encode(attachment).decode("ascii"),
                    "type": "application/pdf",
                    "filename": filename,
                    "disposition": "attachment",
                }
            ],
        }
        response = await self._client.post(self.SEND_PATH, json=payload)

        if response.status_code in (401, 403):
            raise MailerAuthError(f"Mail provider rejected credentials: {response.text}")
        response.raise_for_status()
        logger.info("Sent %s (%d bytes) to %s", filename, len(attachment), to)
