from unittest.mock import patch

from fastapi.testclient import TestClient

from app.config import get_settings
from app.dependencies import (
    _redis_for_url,
    get_completion_service,
    get_redis_client,
    get_retrier,
    get_telegram_service,
    get_voice_cache,
)
from app.main import app
from app.services.durable_write import DurableWriteRetrier
from app.services.llm import AnthropicProvider, ZaiProvider


class TestServiceFactories:
    def test_completion_service_uses_given_settings(self, test_settings):
        settings = test_settings.model_copy(update={"zai_model": "glm-test", "claude_model": "claude-test"})

        service = get_completion_service(settings)

        primary, secondary = service.providers
        assert isinstance(primary, ZaiProvider)
        assert primary.model == "glm-test"
        assert primary.api_key == "zai-key"
        assert isinstance(secondary, AnthropicProvider)
        assert secondary.model == "claude-test"

    def test_telegram_service_uses_given_token(self, test_settings):
        assert get_telegram_service(test_settings).bot_token == "tg-token"

    def test_no_redis_url_means_no_fast_tier(self, test_settings):
        assert get_redis_client(test_settings.model_copy(update={"redis_url": None})) is None

    @patch("app.dependencies.redis.Redis.from_url")
    def test_redis_client_is_shared_per_url(self, mock_from_url, test_settings):
        _redis_for_url.cache_clear()
        settings = test_settings.model_copy(update={"redis_url": "redis://cache.test:6379/3"})

        first = get_redis_client(settings)
        second = get_redis_client(settings)

        assert first is second
        mock_from_url.assert_called_once()
        assert mock_from_url.call_args[0][0] == "redis://cache.test:6379/3"

    def test_voice_cache_takes_ttl_and_collaborators(self, test_settings, retrier, fake_redis):
        settings = test_settings.model_copy(update={"voice_cache_ttl_seconds": 60})

        voice_cache = get_voice_cache(settings, retrier, fake_redis)

        assert voice_cache.ttl_seconds == 60
        assert voice_cache.retrier is retrier
        assert voice_cache.cache is fake_redis
        assert voice_cache.synthesizer.voice_id == settings.elevenlabs_voice_id


class TestSettingsOverride:
    def test_override_reaches_factories_through_depends(self, test_settings):
        settings = test_settings.model_copy(update={"redis_url": None, "vercel_region": "lhr1"})
        app.dependency_overrides[get_settings] = lambda: settings
        try:
            body = TestClient(app).get("/health").json()
        finally:
            app.dependency_overrides.clear()

        assert body["region"] == "lhr1"
        assert body["redis"] is False

    def test_default_retrier_is_durable(self):
        assert isinstance(get_retrier(), DurableWriteRetrier)
