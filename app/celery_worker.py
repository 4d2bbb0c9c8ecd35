"""
Celery Worker Configuration
Sets up Celery with Redis as message broker and result backend, and
schedules the hourly purge of expired sessions and verification codes.

Run:
    celery -A app.celery_worker worker --beat --loglevel=info
"""

from celery import Celery

from app.core.config import get_settings

settings = get_settings()

# Create Celery app
celery_app = Celery(
    'digital_menu_worker',
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=['app.tasks']  # Module containing our tasks
)

# Celery configuration
celery_app.conf.update(
    # Task settings
    task_serializer='json',
    accept_content=['json'],
    result_serializer='json',
    timezone='UTC',
    enable_utc=True,

    # Worker settings
    worker_prefetch_multiplier=1,  # Process one task at a time
    worker_concurrency=2,

    # Result settings
    result_expires=3600,  # Results expire after 1 hour

    # Task execution settings
    task_acks_late=True,  # Acknowledge task after completion
    task_reject_on_worker_lost=True,  # Requeue task if worker dies

    broker_connection_retry_on_startup=True,

    beat_schedule={
        'purge-expired-auth-records': {
            'task': 'app.tasks.purge_expired_auth_records',
            'schedule': 3600.0,
        },
    },
)


if __name__ == '__main__':
    celery_app.start()
