"""
SendGrid Email Service

Production implementation delivering verification codes through SendGrid.
A missing API key or a non-2xx response is reported as a failed result;
callers decide whether that is fatal.
"""

import asyncio
import logging
from typing import Optional

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail, From

from app.services.notifications.base import (
    BaseEmailService,
    NotificationResult,
)
from app.core.config import get_settings

logger = logging.getLogger(__name__)


class SendGridEmailService(BaseEmailService):
    """Production email service using SendGrid."""

    def __init__(self, api_key: Optional[str] = None, from_email: Optional[str] = None):
        settings = get_settings()
        api_key = api_key or settings.sendgrid_api_key

        if api_key:
            self.sendgrid_client = SendGridAPIClient(api_key)
        else:
            self.sendgrid_client = None
            logger.warning("SendGrid credentials not configured")

        self.sendgrid_from_email = from_email or settings.sendgrid_from_email
        self.sendgrid_from_name = settings.sendgrid_from_name

        logger.info("SendGridEmailService initialized")

    @property
    def provider_name(self) -> str:
        return "sendgrid"

    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Send email via SendGrid."""
        if not self.sendgrid_client:
            return NotificationResult(
                success=False,
                error_message="Email service not configured",
                provider="sendgrid"
            )

        try:
            message = Mail(
                from_email=From(self.sendgrid_from_email, self.sendgrid_from_name),
                to_emails=to_email,
                subject=subject,
                html_content=body_html,
                plain_text_content=body_text
            )

            # The SendGrid client is blocking
            response = await asyncio.to_thread(self.sendgrid_client.send, message)

            logger.info(f"Email sent to {to_email}: {response.status_code}")

            return NotificationResult(
                success=response.status_code in [200, 201, 202],
                message_id=response.headers.get("X-Message-Id"),
                error_message=None if response.status_code in [200, 201, 202]
                else f"SendGrid returned {response.status_code}",
                provider="sendgrid"
            )

        except Exception as e:
            logger.error(f"SendGrid error: {e}")
            return NotificationResult(
                success=False,
                error_message=str(e),
                provider="sendgrid"
            )

    async def health_check(self) -> bool:
        """Configured client counts as healthy; SendGrid has no cheap ping."""
        return self.sendgrid_client is not None
