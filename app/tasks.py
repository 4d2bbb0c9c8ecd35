"""
Celery Tasks
Background maintenance for the authentication tables.

Expired sessions are already rejected on read; this task only removes
the stale rows so the tables do not grow without bound.
"""

import asyncio
import logging
import time
from datetime import datetime

from app.celery_worker import celery_app
from app.core.config import get_settings
from app.database import build_engine, build_session_maker
from app.services.auth import purge_expired_records

logger = logging.getLogger(__name__)


async def _purge(database_url: str) -> dict[str, int]:
    """
    Run one purge on an engine owned by this call.

    Each task run gets a fresh event loop from asyncio.run(), and pooled
    async connections cannot outlive the loop that opened them.
    """
    engine = build_engine(database_url)
    try:
        async with build_session_maker(engine)() as db:
            return await purge_expired_records(db)
    finally:
        await engine.dispose()


@celery_app.task(
    bind=True,
    max_retries=3,
    default_retry_delay=5,
    autoretry_for=(Exception,),
    retry_backoff=True
)
def purge_expired_auth_records(self) -> dict:
    """
    Delete expired sessions and verification codes.

    Returns:
        dict: Counts of deleted rows plus timing information
    """
    task_id = self.request.id
    start_time = time.time()

    try:
        purged = asyncio.run(_purge(get_settings().database_url))
    except Exception as e:
        elapsed = round(time.time() - start_time, 3)
        logger.error(f"Task {task_id}: purge failed after {elapsed}s - {e}")
        # Celery will auto-retry based on configuration
        raise

    elapsed = round(time.time() - start_time, 3)
    logger.info(f"Task {task_id}: purge completed in {elapsed}s {purged}")

    return {
        **purged,
        'task_id': task_id,
        'processing_time_seconds': elapsed,
        'timestamp': datetime.now().isoformat(),
    }

