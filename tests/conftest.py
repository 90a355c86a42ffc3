import os

# Point the engine at sqlite so importing app.database never needs Postgres.
os.environ.setdefault("DATABASE_URL", "sqlite://")

from unittest.mock import MagicMock, Mock  # noqa: E402

import pytest  # noqa: E402

from app.config import Settings  # noqa: E402
from app.services.durable_write import DurableWriteRetrier  # noqa: E402


@pytest.fixture
def db_session():
    """Mock database session."""
    return Mock()


@pytest.fixture
def session_factory(db_session):
    return Mock(return_value=db_session)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def retrier(session_factory, sleeps):
    return DurableWriteRetrier(session_factory, sleep=sleeps.append)


@pytest.fixture
def fake_redis():
    """Dict-backed stand-in for redis.Redis(decode_responses=True)."""
    store: dict[str, str] = {}
    cache = MagicMock()
    cache.store = store
    cache.get.side_effect = store.get
    cache.setex.side_effect = lambda key, ttl, value: store.__setitem__(key, value)
    return cache


@pytest.fixture
def test_settings():
    return Settings(
        database_url="sqlite://",
        zai_api_key="zai-key",
        claude_api_key="claude-key",
        elevenlabs_api_key="el-key",
        telegram_bot_token="tg-token",
        twilio_auth_token=None,
        voice_deadline_seconds=8.0,
    )
