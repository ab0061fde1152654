"""
Contact form validation and email composition.
"""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from email.message import EmailMessage
from email.headerregistry import Address
from typing import Any, Mapping, Optional

from council_site.config import Settings

CONTACT_FIELDS = ("firstName", "lastName", "studentId", "subject", "message")

# Student ids that can be used verbatim as the local part of an address.
LOCAL_PART_RE = re.compile(r"[A-Za-z0-9._+-]+")


@dataclass(frozen=True)
class ContactSubmission:
    first_name: str
    last_name: str
    student_id: str
    subject: str
    message: str

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> Optional["ContactSubmission"]:
        """Return a submission, or None when any field is missing or empty."""
        values = []
        for name in CONTACT_FIELDS:
            value = payload.get(name)
            if not isinstance(value, str) or not value:
                return None
            values.append(value)
        return cls(*values)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


def _text_body(submission: ContactSubmission) -> str:
    return (
        f"Name: {submission.full_name}\n"
        f"Student ID: {submission.student_id}\n"
        f"Subject: {submission.subject}\n"
        "\n"
        "Message:\n"
        f"{submission.message}\n"
    )


def _html_body(submission: ContactSubmission, escape: bool) -> str:
    # Fields are interpolated verbatim unless escaping is switched on.
    clean = html.escape if escape else (lambda value: value)
    message = clean(submission.message).replace("\n", "<br>")
    return (
        "<h2>New Contact Form Submission</h2>\n"
        f"<p><strong>Name:</strong> {clean(submission.full_name)}</p>\n"
        f"<p><strong>Student ID:</strong> {clean(submission.student_id)}</p>\n"
        f"<p><strong>Subject:</strong> {clean(submission.subject)}</p>\n"
        "<hr>\n"
        f"<p><strong>Message:</strong><br>{message}</p>\n"
    )


def _header_value(value: str) -> str:
    """Fold line breaks so submitted text cannot add header lines."""
    return " ".join(value.splitlines()).strip()


def _reply_to(submission: ContactSubmission, settings: Settings) -> Optional[Address]:
    student_id = submission.student_id.strip()
    if not LOCAL_PART_RE.fullmatch(student_id):
        return None
    return Address(
        display_name=_header_value(submission.full_name),
        username=student_id,
        domain=settings.student_email_domain,
    )


def build_contact_message(
    submission: ContactSubmission, settings: Settings, sender_address: str
) -> EmailMessage:
    message = EmailMessage()
    message["From"] = Address(
        display_name=settings.contact_sender_name, addr_spec=sender_address
    )
    message["To"] = settings.contact_recipient
    reply_to = _reply_to(submission, settings)
    if reply_to is not None:
        message["Reply-To"] = reply_to
    message["Subject"] = _header_value(f"New Senate Inquiry: {submission.subject}")
    message.set_content(_text_body(submission))
    message.add_alternative(
        _html_body(submission, settings.escape_contact_html), subtype="html"
    )
    return message
