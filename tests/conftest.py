from collections.abc import AsyncIterator

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from dashboard.api.factory import FactoryService
from dashboard.api.user import UserService
from dashboard.testing.app import create_app
from dashboard.testing.backend import FakeBackend
from dashboard.widgets.list_helper import ListHelperFactory
from tests.factories import RecordingNotifier, StubConfirmDialog

# Fixtures in tests/seeds.py are only visible to pytest when registered here.
pytest_plugins = ["tests.seeds"]


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def sent_requests() -> list[httpx.Request]:
    """Every request the client fixture sends, in order."""
    return []


@pytest_asyncio.fixture
async def client(backend: FakeBackend, sent_requests: list[httpx.Request]) -> AsyncIterator[AsyncClient]:
    """HTTP client talking to the fake backend in-process."""

    async def record(request: httpx.Request) -> None:
        sent_requests.append(request)

    async with AsyncClient(
        transport=ASGITransport(app=create_app(backend)),
        base_url="http://test",
        event_hooks={"request": [record]},
    ) as client:
        yield client


@pytest.fixture
def factory_service(client: AsyncClient) -> FactoryService:
    return FactoryService(client, UserService(client))


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def confirm_dialog() -> StubConfirmDialog:
    return StubConfirmDialog()


@pytest.fixture
def list_helper_factory() -> ListHelperFactory:
    return ListHelperFactory()
