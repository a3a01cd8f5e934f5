"""
Helpers shared by use cases: the authorization gate every workflow starts
with, and best-effort notification scheduling.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationDispatchError,
)
from careshare.app.services.unit_of_work import UnitOfWork
from careshare.domain.entities import UserProfile
from careshare.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def load_caller_profile(
    uow: UnitOfWork, user_id: Optional[UUID]
) -> Result[UserProfile]:
    """
    Resolve the authenticated caller's profile.

    Returns:
        Result with the profile, UNAUTHENTICATED when there is no identity,
        or NOT_FOUND when the identity has no profile yet
    """
    if user_id is None:
        return Return.err(Error("UNAUTHENTICATED", "User must be authenticated"))

    profile = await uow.profiles.get_by_user_id(user_id)
    if profile is None:
        return Return.err(Error("NOT_FOUND", "User profile not found"))

    return Return.ok(profile)


def require_manager(profile: UserProfile, action: str) -> Optional[Error]:
    """Error unless the profile is owner/admin of an organization"""
    if profile.organization_id is None:
        return Error("NOT_FOUND", "User must belong to an organization")
    if not profile.is_manager:
        return Error("INSUFFICIENT_PERMISSIONS", f"Insufficient permissions to {action}")
    return None


async def schedule_quietly(
    notifier: INotificationDispatcher, kind: str, payload: Dict[str, Any]
) -> Optional[str]:
    """
    Schedule a notification whose failure must not fail the caller.

    Returns:
        Job id, or None when scheduling failed (logged)
    """
    try:
        return await notifier.schedule(kind, payload)
    except NotificationDispatchError:
        logger.exception(f"Failed to schedule {kind} notification")
        return None
