"""
Email infrastructure.
Handles invoice templates and SMTP delivery.
"""

from .email_service import SmtpEmailService, get_email_service
from .template_loader import EmailTemplateLoader

__all__ = [
    "SmtpEmailService",
    "get_email_service",
    "EmailTemplateLoader"
]
