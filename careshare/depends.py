from typing import Optional
from uuid import UUID

from fastapi import Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from careshare.adapter.services.celery_app import celery_app
from careshare.adapter.services.notification_dispatcher import CeleryNotificationDispatcher
from careshare.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from careshare.api.error import ClientError
from careshare.api.utils.jwt import verify_jwt
from careshare.app.services.clock import IClock, SystemClock
from careshare.app.services.notification_dispatcher import INotificationDispatcher
from careshare.libs.result import Error

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

# Missing credentials are left to the use cases, which answer UNAUTHENTICATED
security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def get_notification_dispatcher() -> INotificationDispatcher:
    return CeleryNotificationDispatcher(celery_app, queue=ApplicationConfig.NOTIFICATION_QUEUE)


def get_clock() -> IClock:
    return SystemClock()


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[UUID]:
    """
    Resolve the caller's identity from the Authorization header.

    Returns:
        The user id from the JWT, or None when no token was sent

    Raises:
        ClientError: 401 if a token was sent but is invalid or expired
    """
    if credentials is None:
        return None

    payload = verify_jwt(credentials.credentials)
    if payload is None or "user_id" not in payload:
        raise ClientError(
            Error("UNAUTHENTICATED", "Invalid or expired token"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )

    try:
        return UUID(payload["user_id"])
    except (ValueError, TypeError, AttributeError):
        raise ClientError(
            Error("UNAUTHENTICATED", "Invalid token subject"),
            status_code=status.HTTP_401_UNAUTHORIZED,
        )
