"""
Email Service Factory

Returns the Mock or SendGrid email service based on ENV_MODE.

Usage:
    from app.services.notifications import get_email_service

    email_service = get_email_service()
    result = await email_service.send_verification_code("owner@example.com", "123456")
"""

import logging
from functools import lru_cache

from app.core.config import get_settings
from app.services.notifications.base import (
    BaseEmailService,
    NotificationResult,
)
from app.services.notifications.mock import MockEmailService
from app.services.notifications.sendgrid import SendGridEmailService

logger = logging.getLogger(__name__)


@lru_cache()
def get_email_service() -> BaseEmailService:
    """Get the configured email service."""
    settings = get_settings()

    if settings.is_development:
        logger.info("Email Service: Using MockEmailService (development mode)")
        return MockEmailService(min_latency=0.05, max_latency=0.2)
    else:
        logger.info(f"Email Service: Using SendGridEmailService ({settings.env_mode.value} mode)")
        return SendGridEmailService()


__all__ = [
    "get_email_service",
    "BaseEmailService",
    "NotificationResult",
    "MockEmailService",
    "SendGridEmailService",
]
