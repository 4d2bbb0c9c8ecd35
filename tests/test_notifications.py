from app.services.notifications import MockEmailService, SendGridEmailService
from app.services.notifications.base import render_verification_email


def test_verification_email_contains_code_and_lifetime():
    subject, body_html, body_text = render_verification_email("482913", 10)

    assert subject == "Your Verification Code"
    assert "482913" in body_html
    assert "482913" in body_text
    assert "10 minutes" in body_text


async def test_mock_service_records_outbox():
    service = MockEmailService()

    result = await service.send_verification_code("owner@example.com", "482913")

    assert result.success is True
    assert result.provider == "mock"
    assert service.last_code_for("owner@example.com") == "482913"
    assert service.last_code_for("someone@example.com") is None


async def test_mock_service_simulated_failure():
    service = MockEmailService(failure_rate=1.0)

    result = await service.send_verification_code("owner@example.com", "482913")

    assert result.success is False
    assert service.outbox == []


async def test_sendgrid_without_key_reports_failure():
    service = SendGridEmailService(api_key=None)
    service.sendgrid_client = None

    result = await service.send_verification_code("owner@example.com", "482913")

    assert result.success is False
    assert result.error_message == "Email service not configured"
    assert await service.health_check() is False


async def test_health_endpoint(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["database"] == "healthy"
    assert body["email_service"] == "healthy"
    assert body["status"] == "operational"
