"""
SMTP error reporting for unhandled exceptions.
"""

import os
import smtplib
import logging
import traceback
from email.mime.text import MIMEText
from datetime import datetime

logger = logging.getLogger(__name__)


class EmailService:
    """Sends plain-text error reports via SMTP"""

    def __init__(self):
        self.smtp_host = os.getenv("SMTP_HOST")
        self.smtp_port = int(os.getenv("SMTP_PORT", "587"))
        self.smtp_user = os.getenv("SMTP_USER")
        self.smtp_pass = os.getenv("SMTP_PASS")
        self.smtp_use_tls = os.getenv("SMTP_USE_TLS", "true").lower() in {
            "1",
            "true",
            "yes",
        }
        self.from_addr = os.getenv("ERROR_FROM", "errors@unisport.local")
        self.to_addrs = [
            addr.strip()
            for addr in os.getenv("ERROR_TO", "").split(",")
            if addr.strip()
        ]

    def is_configured(self) -> bool:
        return bool(
            self.smtp_host and self.smtp_user and self.smtp_pass and self.to_addrs
        )

    def format_error_report(self, error_data: dict) -> str:
        exception = error_data.get("exception")
        if exception is not None:
            trace = "".join(
                traceback.format_exception(
                    type(exception), exception, exception.__traceback__
                )
            )
        else:
            trace = "No traceback available"

        timestamp = error_data.get(
            "timestamp", datetime.utcnow().strftime("%Y-%m-%d %H:%M:%S")
        )
        return (
            f"Time: {timestamp} UTC\n"
            f"Endpoint: {error_data.get('method', 'Unknown')} "
            f"{error_data.get('path', 'Unknown')}\n"
            f"Client: {error_data.get('client', 'Unknown')}\n"
            f"User: {error_data.get('user', 'Anonymous')}\n\n"
            f"{trace}"
        )

    def send_error_email(self, error_data: dict) -> bool:
        """
        Send an error report.

        Args:
            error_data: path, method, client, user, exception and timestamp
                of the failed request
        """
        if not self.is_configured():
            logger.warning("Email service not configured, skipping error email")
            return False

        msg = MIMEText(self.format_error_report(error_data), "plain", "utf-8")
        msg["Subject"] = f"[UniSport Backend][{os.getenv('ENV', 'development')}] ERROR"
        msg["From"] = self.from_addr
        msg["To"] = ", ".join(self.to_addrs)

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port) as server:
                if self.smtp_use_tls:
                    server.starttls()
                server.login(self.smtp_user, self.smtp_pass)
                server.send_message(msg)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Failed to send error email: {e}")
            return False

        logger.info(f"Error email sent to {', '.join(self.to_addrs)}")
        return True


# Global email service instance
email_service = EmailService()
