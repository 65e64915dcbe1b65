from celery import Celery
from apiforge.core.config import settings

celery_app = Celery(
    "apiforge",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["apiforge.tasks.exports"],
)
celery_app.conf.update(
    task_track_started=True,
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    result_expires=3600,
    broker_connection_retry_on_startup=True,
)
