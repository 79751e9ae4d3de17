"""
The dispatcher only knows `transport.send(message)`; which provider sits
behind it is chosen once from Settings.mail_transport:
    smtp    -> SMTPTransport (Gmail by default)
    mailgun -> MailgunTransport (REST API)
    console -> ConsoleTransport (logs instead of sending)
"""

import logging
import smtplib
from email.message import EmailMessage as MIMEMessage
from email.utils import parseaddr
from typing import Protocol

import requests

from membership_service.exceptions import ConfigError, MailTransportError

logger = logging.getLogger(__name__)

PLAIN_TEXT_FALLBACK = "This message requires an HTML-capable email client."


class MailTransport(Protocol):
    def send(self, message): ...


def build_mime_message(message):
    mime = MIMEMessage()
    mime["From"] = message.sender
    mime["To"] = message.to
    mime["Subject"] = message.subject
    mime.set_content(PLAIN_TEXT_FALLBACK)
    mime.add_alternative(message.html_body, subtype="html")

    for attachment in message.attachments:
        maintype, _, subtype = attachment.content_type.partition("/")
        mime.add_attachment(
            attachment.content,
            maintype=maintype or "application",
            subtype=subtype or "octet-stream",
            filename=attachment.filename,
        )
    return mime


class SMTPTransport:
    def __init__(self, host, port, username="", password="", use_tls=True, timeout=10.0):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def send(self, message):
        try:
            mime = build_mime_message(message)
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                if self.use_tls:
                    server.starttls()
                if self.username and self.password:
                    server.login(self.username, self.password)
                server.send_message(mime)
        except (smtplib.SMTPException, OSError, ValueError) as exc:
            raise MailTransportError(f"SMTP send to {message.to} failed: {exc}") from exc


class MailgunTransport:
    def __init__(self, api_key, domain, base_url="https://api.mailgun.net", timeout=10.0):
        self.api_key = api_key
        self.domain = domain
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def endpoint(self):
        return f"{self.base_url}/v3/{self.domain}/messages"

    def send(self, message):
        data = {
            "from": message.sender,
            "to": message.to,
            "subject": message.subject,
            "text": PLAIN_TEXT_FALLBACK,
            "html": message.html_body,
        }
        files = [
            ("attachment", (a.filename, a.content, a.content_type))
            for a in message.attachments
        ]
        try:
            response = requests.post(
                self.endpoint,
                auth=("api", self.api_key),
                data=data,
                files=files or None,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise MailTransportError(f"Mailgun send to {message.to} failed: {exc}") from exc

        if not response.ok:
            raise MailTransportError(
                f"Mailgun send failed HTTP {response.status_code}: {response.text[:300]}"
            )


class ConsoleTransport:
    def send(self, message):
        logger.info(
            "[EMAIL] to=%s subject=%s attachments=%s",
            message.to,
            message.subject,
            [a.filename for a in message.attachments],
        )
        logger.debug("[EMAIL] body=%s", message.html_body)


def build_transport(settings):
    if settings.mail_transport == "console":
        return ConsoleTransport()

    if settings.mail_transport == "mailgun":
        if not settings.mailgun_api_key or not settings.mailgun_domain:
            raise ConfigError("MAILGUN_API_KEY and MAILGUN_DOMAIN are required for the mailgun transport")
        return MailgunTransport(
            api_key=settings.mailgun_api_key,
            domain=settings.mailgun_domain,
            base_url=settings.mailgun_api_base_url,
            timeout=settings.mail_timeout_seconds,
        )

    if not parseaddr(settings.from_email)[1]:
        logger.warning("No sender address configured; set EMAIL_USER or FROM_EMAIL")
    return SMTPTransport(
        host=settings.smtp_host,
        port=settings.smtp_port,
        username=settings.email_user,
        password=settings.email_pass,
        use_tls=settings.smtp_use_tls,
        timeout=settings.mail_timeout_seconds,
    )
