"""
Shared test fixtures.

Vendor HTTP is faked with httpx.MockTransport; storage uses an
in-memory SQLite database through aiosqlite.
"""

from contextlib import asynccontextmanager
from typing import Optional

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.api.v1.router import api_router
from app.db.session import get_async_db
from app.features.smartwatch import IntegrationConfig, VendorCredentials, build_registry
from app.features.smartwatch.models import WorkoutRecord
from app.features.tracker import models  # noqa
from app.models.base import Base


TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FakeVendorAPI:
    """
    Records outgoing requests and answers with canned responses.

    Responses are queued per URL path; the last one for a path is
    repeated once the queue is down to it.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self._responses: dict[str, list[dict]] = {}

    def respond(
        self,
        path: str,
        status_code: int = 200,
        json=None,
        text: Optional[str] = None
    ) -> None:
        self._responses.setdefault(path, []).append(
            {"status_code": status_code, "json": json, "text": text}
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        queue = self._responses.get(request.url.path)
        if not queue:
            return httpx.Response(404, json={"errors": [f"unexpected {request.url.path}"]})
        canned = queue.pop(0) if len(queue) > 1 else queue[0]
        if canned["json"] is not None:
            return httpx.Response(canned["status_code"], json=canned["json"])
        return httpx.Response(canned["status_code"], text=canned["text"] or "")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def vendor_api() -> FakeVendorAPI:
    return FakeVendorAPI()


@pytest.fixture
def fitbit_credentials() -> VendorCredentials:
    return VendorCredentials("ABC123", "s3cret")


@pytest.fixture
def registry(vendor_api, fitbit_credentials):
    config = IntegrationConfig(
        fitbit=fitbit_credentials,
        fitbit_redirect_uri="https://app.example/cb",
    )
    return build_registry(config, transport=vendor_api.transport)


def _make_record(**overrides) -> WorkoutRecord:
    fields = {
        "external_id": "1001",
        "date": "2025-07-10",
        "time": "07:00:00",
        "duration_seconds": 1800,
        "distance_km": 5.0,
        "heart_rate_bpm": 150,
        "calories": 320,
        "activity_type": "Run",
        "device_id": "fitbit",
    }
    fields.update(overrides)
    return WorkoutRecord(**fields)


@pytest.fixture
def make_record():
    """Factory for WorkoutRecord with sensible defaults."""
    return _make_record


# =============================================================================
# Database
# =============================================================================

def _test_engine():
    return create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest_asyncio.fixture
async def db_session():
    """Fresh in-memory database per test."""
    engine = _test_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session

    await engine.dispose()


# =============================================================================
# API
# =============================================================================

@pytest.fixture
def api_client(registry):
    """
    TestClient over the v1 router with a private in-memory database.

    The test app's lifespan creates the tables so they live on the same
    event loop as the requests.
    """
    engine = _test_engine()
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        yield
        await engine.dispose()

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app = FastAPI(lifespan=lifespan)
    app.include_router(api_router, prefix="/api/v1")
    app.state.registry = registry
    app.dependency_overrides[get_async_db] = override_get_db

    with TestClient(app) as client:
        yield client
