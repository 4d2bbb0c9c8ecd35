from app.core.config import get_settings
from app.dependencies import SESSION_COOKIE_MAX_AGE, SESSION_COOKIE_NAME


async def test_send_code_delivers_email(client, email_service):
    response = await client.post(
        "/api/auth/send-code",
        json={"email": "owner@example.com", "name": "Owner", "country": "India"},
    )

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert len(email_service.outbox) == 1
    assert email_service.outbox[0].to_email == "owner@example.com"
    assert email_service.last_code_for("owner@example.com") is not None


async def test_send_code_rejects_invalid_email(client, email_service):
    response = await client.post("/api/auth/send-code", json={"email": "not-an-email"})

    assert response.status_code == 422
    body = response.json()
    assert body["success"] is False
    assert body["error"] == "Validation Error"
    assert email_service.outbox == []


async def test_send_code_delivery_failure_returns_500(client, email_service):
    email_service.failure_rate = 1.0

    response = await client.post("/api/auth/send-code", json={"email": "owner@example.com"})

    assert response.status_code == 500
    assert response.json() == {
        "success": False,
        "error": "Internal Server Error",
        "detail": "Failed to send verification code",
    }


async def test_verify_sets_session_cookie(client, email_service):
    await client.post("/api/auth/send-code", json={"email": "owner@example.com"})
    code = email_service.last_code_for("owner@example.com")

    response = await client.post(
        "/api/auth/verify", json={"email": "owner@example.com", "code": code}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["email"] == "owner@example.com"
    assert body["user"]["email_verified"] is True

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f"{SESSION_COOKIE_NAME}={body['token']}")
    assert "HttpOnly" in set_cookie
    assert "samesite=lax" in set_cookie.lower()
    assert "Path=/" in set_cookie
    assert f"Max-Age={SESSION_COOKIE_MAX_AGE}" in set_cookie
    assert SESSION_COOKIE_MAX_AGE == 30 * 24 * 60 * 60
    if not get_settings().session_cookie_secure:
        assert "Secure" not in set_cookie


async def test_verify_rejects_short_code(client):
    response = await client.post(
        "/api/auth/verify", json={"email": "owner@example.com", "code": "123"}
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Verification code must be 6 digits."


async def test_verify_rejects_wrong_code(client, email_service):
    await client.post("/api/auth/send-code", json={"email": "owner@example.com"})
    code = email_service.last_code_for("owner@example.com")
    wrong = "000000" if code != "000000" else "111111"

    response = await client.post(
        "/api/auth/verify", json={"email": "owner@example.com", "code": wrong}
    )

    assert response.status_code == 401
    assert response.json()["error"] == "Unauthorized"
    assert "set-cookie" not in response.headers


async def test_session_endpoint_reflects_login_state(client, email_service):
    response = await client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json() is None

    await client.post(
        "/api/auth/send-code",
        json={"email": "owner@example.com", "name": "Owner", "country": "India"},
    )
    code = email_service.last_code_for("owner@example.com")
    await client.post("/api/auth/verify", json={"email": "owner@example.com", "code": code})

    response = await client.get("/api/auth/session")
    assert response.status_code == 200
    assert response.json()["user"]["name"] == "Owner"


async def test_bearer_token_is_accepted(client, login):
    headers = await login("owner@example.com")

    response = await client.get("/api/auth/session", headers=headers)

    assert response.json()["user"]["email"] == "owner@example.com"


async def test_logout_deletes_session_and_clears_cookie(client, email_service):
    await client.post("/api/auth/send-code", json={"email": "owner@example.com"})
    code = email_service.last_code_for("owner@example.com")
    verify = await client.post(
        "/api/auth/verify", json={"email": "owner@example.com", "code": code}
    )
    token = verify.json()["token"]

    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}
    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith(f'{SESSION_COOKIE_NAME}=""') or "Max-Age=0" in set_cookie

    client.cookies.clear()
    response = await client.get(
        "/api/auth/session", headers={"Authorization": f"Bearer {token}"}
    )
    assert response.json() is None


async def test_logout_without_session_succeeds(client):
    response = await client.post("/api/auth/logout")

    assert response.status_code == 200
    assert response.json() == {"success": True}


async def test_protected_endpoint_requires_login(client):
    response = await client.get("/api/restaurants")

    assert response.status_code == 401
    assert response.json() == {
        "success": False,
        "error": "Unauthorized",
        "detail": "You must be logged in to access this resource",
    }


async def test_email_domain_is_normalized_consistently(client, email_service):
    await client.post("/api/auth/send-code", json={"email": "Owner@Example.COM"})
    code = email_service.last_code_for("Owner@example.com")
    assert code is not None

    response = await client.post(
        "/api/auth/verify", json={"email": "Owner@EXAMPLE.com", "code": code}
    )

    assert response.status_code == 200
    assert response.json()["user"]["email"] == "Owner@example.com"
