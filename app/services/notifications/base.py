"""
Email Service Abstract Base Class

Defines the interface for delivering verification codes by email.
Supports both Mock (development) and SendGrid (staging/production)
implementations.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass
class NotificationResult:
    """Result from handing a message to the delivery provider."""
    success: bool
    message_id: Optional[str] = None
    error_message: Optional[str] = None
    provider: str = "unknown"


def render_verification_email(code: str, ttl_minutes: int) -> tuple[str, str, str]:
    """Build (subject, html, text) for a verification code email."""
    subject = "Your Verification Code"
    body_html = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
        <h1>Your Verification Code</h1>
        <p>Your verification code is: <strong>{code}</strong></p>
        <p>This code will expire in {ttl_minutes} minutes.</p>
    </div>
    """
    body_text = (
        f"Your verification code is: {code}\n"
        f"This code will expire in {ttl_minutes} minutes."
    )
    return subject, body_html, body_text


class BaseEmailService(ABC):
    """Abstract base class for email services."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Return the provider name."""
        pass

    @abstractmethod
    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Send an email."""
        pass

    async def send_verification_code(
        self,
        to_email: str,
        code: str,
        ttl_minutes: int = 10,
    ) -> NotificationResult:
        """Send a one-time verification code."""
        subject, body_html, body_text = render_verification_email(code, ttl_minutes)
        return await self.send_email(
            to_email=to_email,
            subject=subject,
            body_html=body_html,
            body_text=body_text,
        )

    @abstractmethod
    async def health_check(self) -> bool:
        """Check service connectivity."""
        pass
