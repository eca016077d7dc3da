"""
SMTP email service.
Renders invoice templates and delivers them through smtplib.
"""

import asyncio
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Any, Dict, List, Optional

from app.config import get_settings
from app.domain.models.customer import Customer
from app.domain.models.invoice import Invoice
from app.domain.models.user import User
from app.domain.services.email_service import EmailService
from .template_loader import EmailTemplateLoader


logger = logging.getLogger(__name__)


class SmtpEmailService(EmailService):
    """EmailService backed by an SMTP relay."""

    def __init__(self, template_loader: Optional[EmailTemplateLoader] = None):
        settings = get_settings()
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_name = settings.email_from_name
        self.from_address = settings.email_from_address
        self.default_currency = settings.default_currency
        self.template_loader = template_loader or EmailTemplateLoader()
        self.sent_emails: List[Dict[str, Any]] = []  # messages logged while SMTP is off

    def _is_smtp_configured(self) -> bool:
        return bool(self.smtp_host)

    async def send_email(self,
                        to: str,
                        subject: str,
                        body: str,
                        html_body: Optional[str] = None) -> bool:
        """
        Send an email; delivery failures are logged and reported as False.
        """
        if not self._is_smtp_configured():
            self.sent_emails.append({"to": to, "subject": subject, "body": body})
            logger.info("Email logged (SMTP not configured): %s to %s", subject, to)
            return True

        message = self._create_mime_message(to, subject, body, html_body)
        try:
            await asyncio.to_thread(self._send_via_smtp, message, to)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("Failed to send email to %s: %s", to, e)
            return False

        logger.info("Email sent successfully to %s: %s", to, subject)
        return True

    async def send_invoice_email(self,
                                invoice: Invoice,
                                customer: Customer,
                                issuer: User) -> bool:
        issuer_name = issuer.business_name or issuer.name
        currency = issuer.settings.currency if issuer.settings else self.default_currency
        context = {
            "invoice": invoice,
            "customer": customer,
            "issuer": issuer,
            "issuer_name": issuer_name,
            "currency": currency,
        }
        html_body, text_body = self.template_loader.render_pair("invoice", context)

        return await self.send_email(
            to=customer.email,
            subject=f"Invoice {invoice.number} from {issuer_name}",
            body=text_body,
            html_body=html_body,
        )

    def _create_mime_message(self,
                             to: str,
                             subject: str,
                             body: str,
                             html_body: Optional[str]) -> MIMEMultipart:
        message = MIMEMultipart("alternative")
        message["Subject"] = subject
        message["From"] = formataddr((self.from_name, self.from_address))
        message["To"] = to
        message["Message-ID"] = make_msgid()

        message.attach(MIMEText(body, "plain", "utf-8"))
        if html_body:
            message.attach(MIMEText(html_body, "html", "utf-8"))
        return message

    def _send_via_smtp(self, message: MIMEMultipart, to: str) -> None:
        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
            server.starttls()
            if self.smtp_user and self.smtp_password:
                server.login(self.smtp_user, self.smtp_password)
            server.send_message(message, to_addrs=[to])


# Singleton instance
_email_service = None


def get_email_service() -> SmtpEmailService:
    """Get singleton email service instance."""
    global _email_service
    if _email_service is None:
        _email_service = SmtpEmailService()
    return _email_service
