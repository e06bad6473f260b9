from celery import Celery

from bridgeagg.config import settings

celery_app = Celery(
    "bridgeagg",
    broker=settings.redis_url,
    backend=settings.redis_url,
    include=["bridgeagg.workers.tasks"],
)

celery_app.conf.update(
    task_serializer="json",
    result_serializer="json",
    accept_content=["json"],
    timezone="UTC",
    enable_utc=True,
    task_acks_late=True,
    worker_prefetch_multiplier=1,
)
