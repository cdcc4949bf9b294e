"""Asynchronous tasks for the delivery orders module."""

from __future__ import annotations

import structlog
from celery import shared_task
from django.conf import settings
from django.db import transaction
from django.db.models import Q

from modules.core.models import EventStatus, OutboxEvent
from modules.delivery_orders.constants import OUTBOX_TOPIC
from modules.delivery_orders.events import EVENT_TYPES
from shared.infrastructure.bus import event_bus

logger = structlog.get_logger(__name__)


@shared_task(name="delivery_orders.publish_outbox_events")
def publish_outbox_events(batch_size: int = 100) -> dict[str, int]:
    """Drain pending delivery order events from the outbox to the event bus.

    Rows are handled oldest first.  Failed rows are retried on later runs
    until ``OUTBOX_MAX_RETRIES`` is reached.
    """
    max_retries = getattr(settings, "OUTBOX_MAX_RETRIES", 5)
    published = failed = 0

    with transaction.atomic():
        rows = list(
            OutboxEvent.objects.select_for_update(skip_locked=True)
            .filter(topic=OUTBOX_TOPIC)
            .filter(
                Q(status=EventStatus.PENDING)
                | Q(status=EventStatus.FAILED, retry_count__lt=max_retries)
            )
            .order_by("created_at")[:batch_size]
        )

        for row in rows:
            log = logger.bind(
                outbox_event_id=str(row.id),
                event_type=row.event_type,
                aggregate_id=row.aggregate_id,
            )
            event_class = EVENT_TYPES.get(row.event_type)
            if event_class is None:
                log.error("outbox.unknown_event_type")
                row.mark_as_failed(f"Unknown event type: {row.event_type}")
                failed += 1
                continue

            try:
                handler_count = event_bus.publish(event_class.from_payload(row.payload))
            except Exception as exc:
                log.exception("outbox.publish_failed")
                row.mark_as_failed(str(exc))
                failed += 1
                continue

            row.mark_as_published()
            published += 1
            log.info("outbox.published", handler_count=handler_count)

    result = {"published": published, "failed": failed}
    logger.info("outbox.batch_processed", **result)
    return result
