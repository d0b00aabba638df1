from __future__ import annotations

import logging
import smtplib
from dataclasses import dataclass
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from typing import Protocol

from ..core.constants import DEFAULT_SMTP_TIMEOUT_SECONDS
from ..core.exceptions import NotificationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EmailMessage:
    sender: str
    to: str
    subject: str
    html: str


@dataclass(frozen=True)
class DeliveryReceipt:
    to: str
    subject: str
    response: str


class Mailer(Protocol):
    sender: str

    def send(self, message: EmailMessage) -> DeliveryReceipt:
        raise NotImplementedError


class SmtpMailer:
    """Send HTML mail through one SMTP relay.

    A connection is opened per message and bounded by ``timeout`` seconds, so a
    hung relay fails the send instead of blocking the caller.
    """

    def __init__(self, smtp_config: dict):
        self._host = str(smtp_config.get("host", "localhost"))
        self._port = int(smtp_config.get("port", 587))
        self._username = str(smtp_config.get("username") or "")
        self._password = str(smtp_config.get("password") or "")
        self._use_tls = bool(smtp_config.get("use_tls", True))
        self._timeout = float(smtp_config.get("timeout", DEFAULT_SMTP_TIMEOUT_SECONDS))
        self.sender = str(smtp_config.get("sender") or self._username)

    def _build(self, message: EmailMessage) -> MIMEMultipart:
        mime = MIMEMultipart("alternative")
        mime["Subject"] = message.subject
        mime["From"] = message.sender
        mime["To"] = message.to
        mime.attach(MIMEText(message.html, "html"))
        return mime

    def send(self, message: EmailMessage) -> DeliveryReceipt:
        if not message.to:
            raise NotificationError(f"No recipient for '{message.subject}'")

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout) as server:
                if self._use_tls:
                    server.starttls()
                if self._username:
                    server.login(self._username, self._password)
                refused = server.sendmail(message.sender, [message.to], self._build(message).as_string())
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Failed to send '{message.subject}' to {message.to}: {e}") from e

        if refused:
            raise NotificationError(f"Recipient refused: {refused}")

        response = f"accepted by {self._host}:{self._port}"
        logger.info("Message sent: %s (%s)", response, message.subject)
        return DeliveryReceipt(to=message.to, subject=message.subject, response=response)
