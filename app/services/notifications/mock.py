"""
Mock Email Service

Simulates email delivery for development and tests.
Nothing is sent; every accepted message is logged and kept in an
in-memory outbox so a developer (or a test) can read the code.
"""

import asyncio
import random
import re
import uuid
import logging
from dataclasses import dataclass
from typing import Optional

from app.services.notifications.base import (
    BaseEmailService,
    NotificationResult,
)

logger = logging.getLogger(__name__)

_CODE_PATTERN = re.compile(r"\b(\d{6})\b")


@dataclass
class SentEmail:
    to_email: str
    subject: str
    body_html: str
    body_text: Optional[str]
    message_id: str


class MockEmailService(BaseEmailService):
    """Mock email service for development."""

    def __init__(
        self,
        failure_rate: float = 0.0,
        min_latency: float = 0.0,
        max_latency: float = 0.0,
    ):
        self.failure_rate = failure_rate
        self.min_latency = min_latency
        self.max_latency = max_latency
        self.outbox: list[SentEmail] = []
        logger.info(f"MockEmailService initialized (failure_rate={failure_rate:.0%})")

    @property
    def provider_name(self) -> str:
        return "mock"

    async def _simulate_latency(self) -> None:
        """Simulate network latency."""
        if self.max_latency > 0:
            await asyncio.sleep(random.uniform(self.min_latency, self.max_latency))

    def _should_fail(self) -> bool:
        return random.random() < self.failure_rate

    async def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> NotificationResult:
        """Simulate sending email."""
        await self._simulate_latency()

        if self._should_fail():
            logger.warning(f"Mock email failed (simulated) to {to_email}")
            return NotificationResult(
                success=False,
                error_message="Simulated email failure",
                provider="mock"
            )

        message_id = f"email_mock_{uuid.uuid4().hex[:12]}"
        self.outbox.append(
            SentEmail(
                to_email=to_email,
                subject=subject,
                body_html=body_html,
                body_text=body_text,
                message_id=message_id,
            )
        )
        logger.info(f"Mock email sent to {to_email}: {subject} (ID: {message_id})")

        return NotificationResult(
            success=True,
            message_id=message_id,
            provider="mock"
        )

    def last_code_for(self, email: str) -> Optional[str]:
        """Most recent 6-digit code delivered to ``email``, if any."""
        for sent in reversed(self.outbox):
            if sent.to_email == email:
                match = _CODE_PATTERN.search(sent.body_text or sent.body_html)
                if match:
                    return match.group(1)
        return None

    async def health_check(self) -> bool:
        """Mock always returns healthy."""
        return True
