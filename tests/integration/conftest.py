from typing import Any, Dict, List, Tuple
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import careshare.domain.entities  # noqa: F401
from careshare.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from careshare.api.utils.jwt import create_access_token
from careshare.app.services.notification_dispatcher import (
    INotificationDispatcher,
    NotificationDispatchError,
)
from careshare.depends import get_notification_dispatcher, get_unit_of_work
from careshare.domain.entities import User


class RecordingDispatcher(INotificationDispatcher):
    """Keeps scheduled jobs in memory instead of sending them to the broker"""

    def __init__(self):
        self.jobs: List[Tuple[str, Dict[str, Any]]] = []
        self.fail = False

    async def schedule(self, kind: str, payload: Dict[str, Any]) -> str:
        if self.fail:
            raise NotificationDispatchError(kind, "broker unavailable")
        self.jobs.append((kind, payload))
        return f"job-{len(self.jobs)}"

    def last(self, kind: str) -> Dict[str, Any]:
        return [payload for job_kind, payload in self.jobs if job_kind == kind][-1]


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path}/test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest_asyncio.fixture
async def client(db_session, dispatcher):
    from careshare.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_notification_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def register_user(db_session):
    """
    Create an identity the way the authentication provider would.

    Returns the user id as a string and ready-made auth headers.
    """

    async def _register(email: str) -> Tuple[str, Dict[str, str]]:
        user_id = uuid4()
        db_session.add(User(id=user_id, email=email))
        await db_session.commit()
        token = create_access_token(user_id)
        return str(user_id), {"Authorization": f"Bearer {token}"}

    return _register


@pytest.fixture
def create_profile(client):
    async def _create(headers, email, first_name="Test", last_name="User", invite_token=None):
        body = {"first_name": first_name, "last_name": last_name, "email": email}
        if invite_token:
            body["invite_token"] = invite_token
        response = await client.post("/api/profiles", json=body, headers=headers)
        assert response.status_code == 201, response.text
        return response.json()

    return _create


@pytest.fixture
def create_owner(register_user, create_profile, client):
    """Identity + profile + organization; returns (headers, organization_id)"""

    async def _create(email: str, organization_name: str = "Sunrise Care"):
        _, headers = await register_user(email)
        await create_profile(headers, email, first_name="Olive", last_name="Owner")
        response = await client.post(
            "/api/organizations",
            json={"name": organization_name, "type": "aged_care", "email": email},
            headers=headers,
        )
        assert response.status_code == 201, response.text
        return headers, response.json()["organization_id"]

    return _create
