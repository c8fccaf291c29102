"""SendGrid email client for infrastructure layer."""

from infrastructure.clients.sendgrid.client import SendGridClient

__all__ = ["SendGridClient"]
