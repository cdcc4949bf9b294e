from django.apps import AppConfig


class DeliveryOrdersConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.delivery_orders"
    label = "delivery_orders"

    def ready(self) -> None:
        from modules.delivery_orders.events import (
            DeliveryAgentAssigned,
            DeliveryOrderCreated,
            DeliveryOrderStatusChanged,
        )
        from modules.delivery_orders.handlers import (
            delivery_agent_assigned_handler,
            delivery_order_created_handler,
            delivery_order_status_changed_handler,
        )
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(DeliveryOrderCreated, delivery_order_created_handler)
        event_bus.subscribe(
            DeliveryOrderStatusChanged, delivery_order_status_changed_handler
        )
        event_bus.subscribe(DeliveryAgentAssigned, delivery_agent_assigned_handler)
