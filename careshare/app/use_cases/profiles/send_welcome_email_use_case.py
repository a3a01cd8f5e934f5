"""
Send Welcome Email Use Case

Sends the welcome email once, on the user's first dashboard visit.
"""

import logging
from typing import Optional
from uuid import UUID

from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationKind,
)
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.app.use_cases.common import load_caller_profile, schedule_quietly
from careshare.libs.result import Result, Return

from .dtos import SendWelcomeEmailResponse

logger = logging.getLogger(__name__)


class SendWelcomeEmailUseCase:
    """
    Business Rules:
    - At most one welcome email per profile (welcome_email_sent)
    - The flag is only set once the email was scheduled
    - A scheduling failure never fails the caller
    """

    def __init__(self, uow: UnitOfWork, notifier: INotificationDispatcher):
        self.uow = uow
        self.notifier = notifier

    async def execute(self, user_id: Optional[UUID]) -> Result[SendWelcomeEmailResponse]:
        async with self.uow:
            caller = await load_caller_profile(self.uow, user_id)
            if caller.is_err():
                return Return.err(caller.error)
            profile = caller.value

            if profile.welcome_email_sent:
                return Return.ok(SendWelcomeEmailResponse(sent=False, already_sent=True))

            job_id = await schedule_quietly(
                self.notifier,
                NotificationKind.WELCOME,
                {"user_email": profile.email, "user_name": profile.first_name},
            )
            if job_id is None:
                return Return.ok(SendWelcomeEmailResponse(sent=False))

            profile.welcome_email_sent = True
            await self.uow.profiles.update(profile)
            await self.uow.commit()

            logger.info(f"Welcome email scheduled for profile {profile.id}")
            return Return.ok(SendWelcomeEmailResponse(sent=True))
