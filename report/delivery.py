"""Email delivery of a rendered report.

The recipient is validated before anything else happens: an invalid address
raises :class:`InvalidRecipientError` without rendering and without touching
the mailer.  The report record (and any document already rendered) is left
unchanged either way, so the caller can still offer it for download.
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Optional, Protocol

from report.models import ReportRecord
from report.renderer import RenderedDocument, render

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class InvalidRecipientError(ValueError):
    """The recipient address is not shaped like ``local@domain.tld``."""


class Mailer(Protocol):
    async def send(
        self, to: str, subject: str, body: str, attachment: bytes, filename: str
    ) -> None: ...


def validate_recipient(address: object) -> str:
    """Return *address* stripped, or raise InvalidRecipientError."""
    if not isinstance(address, str) or not EMAIL_PATTERN.match(address.strip()):
        raise InvalidRecipientError(f"Invalid email address: {address!r}")
    return address.strip()


async def email_report(
    report: ReportRecord,
    recipient: str,
    mailer: Mailer,
    document: Optional[RenderedDocument] = None,
) -> RenderedDocument:
    """Send *report* as a PDF attachment to *recipient*.

    Args:
        report:     The assembled report.
        recipient:  Destination address; validated before any other work.
        mailer:     Anything with an async ``send`` (normally SendGridMailer).
        document:   An already-rendered document to reuse.  Rendered here,
                    in a worker thread, when omitted.

    Returns:
        The document that was sent.

    Raises:
        InvalidRecipientError: *recipient* is malformed.  Nothing is sent.
    """
    to = validate_recipient(recipient)
    if document is None:
        document = await asyncio.to_thread(render, report)

    await mailer.send(
        to=to,
        subject=f"Greenhouse Gas Emissions Report - {report.company_name}",
        body=(
            f"Please find attached the greenhouse gas emissions report {report.report_id} "
            f"for {report.company_name}, generated on {report.formatted_date}."
        ),
        attachment=document.content,
        filename=document.filename,
    )
    logger.info("Emailed report %s to %s", report.report_id, to)
    return document
