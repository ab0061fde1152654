"""
Mail relay abstraction: SMTP via aiosmtplib, plus an in-memory outbox for tests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.message import EmailMessage
from typing import Protocol

import aiosmtplib


class Mailer(Protocol):
    """Sends one fully composed message."""

    @property
    def sender_address(self) -> str:
        ...

    async def send(self, message: EmailMessage) -> None:
        ...


@dataclass
class InMemoryMailer:
    """Collects outgoing messages instead of sending them.

    With ``keep_outbox`` off, messages are counted and dropped.
    """

    sender_address: str = "noreply@example.test"
    outbox: list[EmailMessage] = field(default_factory=list)
    fail: bool = False
    attempts: int = 0
    keep_outbox: bool = True

    async def send(self, message: EmailMessage) -> None:
        self.attempts += 1
        if self.fail:
            raise aiosmtplib.SMTPException("relay unavailable")
        if self.keep_outbox:
            self.outbox.append(message)


@dataclass
class SmtpMailer:
    """
    Authenticated SMTP relay. A new connection is opened per message; there is
    no pooling, timeout override or retry.
    """

    hostname: str
    port: int
    username: str
    password: str
    start_tls: bool = True

    @property
    def sender_address(self) -> str:
        return self.username

    async def send(self, message: EmailMessage) -> None:
        await aiosmtplib.send(
            message,
            hostname=self.hostname,
            port=self.port,
            username=self.username,
            password=self.password,
            start_tls=self.start_tls,
            timeout=None,
        )
