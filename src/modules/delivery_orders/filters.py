import django_filters

from modules.delivery_orders.models import DeliveryOrder


class DeliveryOrderFilter(django_filters.FilterSet):
    status = django_filters.CharFilter(field_name="status", lookup_expr="iexact")
    delivery_agent = django_filters.NumberFilter(field_name="delivery_agent_id")
    start_date = django_filters.DateFilter(field_name="created_at", lookup_expr="gte")
    end_date = django_filters.DateFilter(field_name="created_at", lookup_expr="lte")

    class Meta:
        model = DeliveryOrder
        fields = ["status", "delivery_agent", "start_date", "end_date"]
