from celery import Celery

from config import ApplicationConfig

celery_app = Celery(
    "careshare",
    broker=ApplicationConfig.NOTIFICATION_BROKER_URL,
)
celery_app.conf.update(
    task_default_queue=ApplicationConfig.NOTIFICATION_QUEUE,
    task_serializer="json",
    accept_content=["json"],
    enable_utc=True,
    # Fail fast when the broker is down instead of blocking the request
    broker_connection_retry_on_startup=False,
    broker_transport_options={"max_retries": 1},
)
