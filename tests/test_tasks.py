import asyncio
from datetime import timedelta

from app import tasks
from app.core.config import Settings
from app.database import build_engine, build_session_maker, init_db
from app.models import EmailVerificationCode, User, UserSession, utcnow


async def seed_auth_records(database_url: str) -> None:
    engine = build_engine(database_url)
    try:
        await init_db(bind=engine)
        async with build_session_maker(engine)() as db:
            now = utcnow()
            user = User(email="owner@example.com")
            db.add(user)
            await db.flush()
            db.add_all([
                UserSession(token="stale", user_id=user.id, expires_at=now - timedelta(days=1)),
                UserSession(token="live", user_id=user.id, expires_at=now + timedelta(days=1)),
                EmailVerificationCode(
                    email=user.email, code="123456", expires_at=now - timedelta(minutes=1)
                ),
            ])
            await db.commit()
    finally:
        await engine.dispose()


def test_purge_task_runs_repeatedly_against_database(monkeypatch, tmp_path):
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'purge.db'}"
    asyncio.run(seed_auth_records(database_url))
    monkeypatch.setattr(
        tasks, "get_settings", lambda: Settings(_env_file=None, database_url=database_url)
    )

    first = tasks.purge_expired_auth_records.apply().get()
    second = tasks.purge_expired_auth_records.apply().get()

    assert (first["sessions"], first["codes"]) == (1, 1)
    assert (second["sessions"], second["codes"]) == (0, 0)
    assert "task_id" in first
    assert first["processing_time_seconds"] >= 0


def test_purge_task_is_scheduled_hourly():
    schedule = tasks.celery_app.conf.beat_schedule["purge-expired-auth-records"]

    assert schedule["task"] == "app.tasks.purge_expired_auth_records"
    assert schedule["schedule"] == 3600.0
