"""Owner notification sinks.

A sink takes a subject and a plain-text body. The sync engine calls it at
most once per cycle and treats it as best-effort.
"""

import smtplib
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Protocol, runtime_checkable

from video_sync.core.config import Settings
from video_sync.core.exceptions import NotificationError
from video_sync.core.logging_config import get_logger

logger = get_logger("notify")


@runtime_checkable
class Notifier(Protocol):
    def notify(self, subject: str, body: str) -> None: ...


class LogNotifier:
    """Writes notifications to the application log."""

    def notify(self, subject: str, body: str) -> None:
        logger.info("Notify owner: %s\n%s", subject, body)


class EmailNotifier:
    """Sends notifications to the site owner over SMTP (STARTTLS)."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        user: str = "",
        password: str = "",
        to_addr: str = "",
        from_name: str = "Video Sync",
        timeout: float = 30.0,
    ) -> None:
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.to_addr = to_addr or user
        self.from_name = from_name
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "EmailNotifier":
        return cls(
            host=settings.smtp_host,
            port=settings.smtp_port,
            user=settings.smtp_user,
            password=settings.smtp_pass,
            to_addr=settings.notify_email_to,
            from_name=settings.notify_from_name,
        )

    def notify(self, subject: str, body: str) -> None:
        """Send one email.

        Raises:
            NotificationError: If the message could not be delivered
        """
        msg = MIMEText(body, "plain", "utf-8")
        msg["Subject"] = subject
        msg["From"] = formataddr((self.from_name, self.user or self.to_addr))
        msg["To"] = self.to_addr

        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
                server.starttls()
                if self.user:
                    server.login(self.user, self.password)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f"Email delivery failed: {e}") from e

        logger.info("Email sent: %s", subject)


class CompositeNotifier:
    """Fans a notification out to several sinks.

    Every sink is attempted; the first failure is re-raised afterwards.
    """

    def __init__(self, *notifiers: Notifier) -> None:
        self.notifiers = list(notifiers)

    def notify(self, subject: str, body: str) -> None:
        first_error: NotificationError | None = None
        for notifier in self.notifiers:
            try:
                notifier.notify(subject, body)
            except NotificationError as e:
                logger.warning("%s failed: %s", type(notifier).__name__, e)
                if first_error is None:
                    first_error = e
        if first_error is not None:
            raise first_error


def create_notifier(settings: Settings) -> Notifier:
    """Build the owner notifier from settings.

    Always logs; additionally emails the owner when SMTP is configured.
    """
    if settings.email_configured:
        return CompositeNotifier(LogNotifier(), EmailNotifier.from_settings(settings))
    return LogNotifier()
