"""Integration tests for the Celery configuration."""

import pytest

pytestmark = pytest.mark.integration


@pytest.fixture(autouse=True)
def _celery_eager(settings):
    """Run tasks synchronously in the test process."""
    settings.CELERY_TASK_ALWAYS_EAGER = True
    settings.CELERY_TASK_EAGER_PROPAGATES = True


class TestCeleryConfig:
    """Celery loads through Django settings."""

    def test_celery_app_is_importable(self):
        from config.celery import app

        assert app.main == "delivery"

    def test_celery_app_exported_from_init(self):
        from config import celery_app

        assert celery_app.main == "delivery"

    def test_celery_broker_url_configured(self, settings):
        assert settings.CELERY_BROKER_URL is not None
        assert "redis" in settings.CELERY_BROKER_URL

    def test_celery_serializer_is_json(self, settings):
        assert settings.CELERY_TASK_SERIALIZER == "json"
        assert settings.CELERY_RESULT_SERIALIZER == "json"
        assert settings.CELERY_ACCEPT_CONTENT == ["json"]

    def test_celery_timezone_matches_django(self, settings):
        assert settings.CELERY_TIMEZONE == settings.TIME_ZONE

    def test_outbox_publisher_is_scheduled(self, settings):
        entry = settings.CELERY_BEAT_SCHEDULE["publish-delivery-order-events"]

        assert entry["task"] == "delivery_orders.publish_outbox_events"
        assert entry["schedule"] == settings.OUTBOX_PUBLISH_INTERVAL

    def test_outbox_task_is_registered(self):
        from config.celery import app

        app.loader.import_default_modules()

        assert "delivery_orders.publish_outbox_events" in app.tasks


class TestOutboxTask:
    """The outbox publisher runs in eager mode."""

    def test_empty_outbox(self):
        from modules.delivery_orders.tasks import publish_outbox_events

        result = publish_outbox_events.delay()

        assert result.successful()
        assert result.result == {"published": 0, "failed": 0}

    def test_direct_call(self):
        from modules.delivery_orders.tasks import publish_outbox_events

        assert publish_outbox_events(batch_size=10) == {"published": 0, "failed": 0}
