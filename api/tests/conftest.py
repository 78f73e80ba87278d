from datetime import datetime, timezone

import pytest
from httpx import AsyncClient, ASGITransport

from concierge.main import app
from concierge.services.inbox_service import InboxService


# 2024-01-10 12:00 JST
NOW = datetime(2024, 1, 10, 3, 0, tzinfo=timezone.utc)

PLAN_SLA = {
    'light': (1440, 240),
    'standard': (720, 120),
    'premium': (120, 30),
}


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def inbox_service():
    return InboxService(PLAN_SLA, unreported_threshold_days=2)


@pytest.fixture
async def client():
    """Async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url='http://test') as ac:
        yield ac
