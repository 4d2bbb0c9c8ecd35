"""
Shared fixtures.

Every test gets its own SQLite database file, a mock email service whose
outbox exposes the delivered codes, and (for service tests) a frozen
clock that can be advanced to cross expiry boundaries.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["ENV_MODE"] = "development"
os.environ["REDIS_URL"] = "redis://localhost:6399/0"
os.environ.pop("MASTER_CODE", None)

from datetime import datetime, timedelta, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from app.database import Base, build_engine, build_session_maker, get_db
from app.dependencies import get_auth_config
from app.main import app
from app.services.auth import AuthConfig, AuthService
from app.services.notifications import MockEmailService, get_email_service


class FrozenClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
async def engine(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine):
    return build_session_maker(engine)


@pytest.fixture
async def db(session_maker):
    async with session_maker() as session:
        yield session


@pytest.fixture
def email_service():
    return MockEmailService()


@pytest.fixture
def auth_config():
    return AuthConfig()


@pytest.fixture
def clock():
    return FrozenClock(datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def auth_service(db, email_service, auth_config, clock):
    return AuthService(db, email_service, auth_config, clock=clock)


@pytest.fixture
async def client(session_maker, email_service, auth_config):
    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service
    app.dependency_overrides[get_auth_config] = lambda: auth_config
    previous_session_maker = app.state.session_maker
    app.state.session_maker = session_maker

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c

    app.dependency_overrides.clear()
    app.state.session_maker = previous_session_maker


@pytest.fixture
def login(client, email_service):
    """Log ``email`` in through the API and return bearer headers for it."""

    async def _login(email: str, name: str = "Owner", country: str = "India") -> dict[str, str]:
        response = await client.post(
            "/api/auth/send-code",
            json={"email": email, "name": name, "country": country},
        )
        assert response.status_code == 200, response.text

        code = email_service.last_code_for(email)
        response = await client.post("/api/auth/verify", json={"email": email, "code": code})
        assert response.status_code == 200, response.text

        client.cookies.clear()
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login
