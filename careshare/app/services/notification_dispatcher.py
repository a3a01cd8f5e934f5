from abc import ABC, abstractmethod
from typing import Any, Dict


class NotificationKind:
    """Notification job names understood by the delivery workers"""

    MEMBER_INVITATION = "member_invitation"
    PASSWORD_RESET = "password_reset"
    OTP = "otp"
    ACCESS_REQUEST = "access_request"
    PATIENT_ACCESS_GRANTED = "patient_access_granted"
    WELCOME = "welcome"


class NotificationDispatchError(Exception):
    """The job could not be handed to the queue"""

    def __init__(self, kind: str, reason: str = ""):
        self.kind = kind
        self.reason = reason
        super().__init__(f"Failed to schedule {kind} notification: {reason}")


class INotificationDispatcher(ABC):
    """Deferred, best-effort notification scheduling"""

    @abstractmethod
    async def schedule(self, kind: str, payload: Dict[str, Any]) -> str:
        """
        Enqueue a notification job and return its job id.

        Does not wait for delivery.

        Raises:
            NotificationDispatchError: the job could not be enqueued
        """
        pass
