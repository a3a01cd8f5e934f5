import asyncio
import logging
from typing import Any, Dict, Optional

from celery import Celery
from kombu.exceptions import KombuError

from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationDispatchError,
)

logger = logging.getLogger(__name__)


class CeleryNotificationDispatcher(INotificationDispatcher):
    """
    Hands notification jobs to delivery workers through Celery.

    Jobs are sent by name ("notifications.<kind>") so the API process does
    not import the worker code.
    """

    def __init__(self, app: Celery, queue: Optional[str] = None):
        self.app = app
        self.queue = queue

    async def schedule(self, kind: str, payload: Dict[str, Any]) -> str:
        try:
            async_result = await asyncio.to_thread(
                self.app.send_task,
                f"notifications.{kind}",
                kwargs=payload,
                queue=self.queue,
            )
        except (KombuError, OSError) as e:
            logger.warning(f"Could not enqueue {kind} notification: {e}")
            raise NotificationDispatchError(kind, str(e)) from e

        logger.info(f"Scheduled {kind} notification job {async_result.id}")
        return async_result.id
