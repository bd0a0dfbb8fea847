"""Celery application for transactional email.

Workers run with ``celery -A src.celery_app worker -Q email``. Under test,
tasks execute inline so no broker is needed.
"""

from celery import Celery

from src.config import get_settings
from src.logging_config import configure_logging

settings = get_settings()
configure_logging(settings)

app = Celery("restaurant_backoffice", broker=settings.redis_url, include=["src.tasks.mail"])

app.conf.update(
    task_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_routes={"src.tasks.mail.*": {"queue": "email"}},
    # Email sends are not idempotent; ack only once delivered
    task_acks_late=True,
    worker_prefetch_multiplier=1,
    task_ignore_result=True,
    task_time_limit=60,
    task_soft_time_limit=45,
    task_always_eager=settings.is_test,
)
