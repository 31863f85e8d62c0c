import django_filters

from modules.warehouse.models import StockPlacement


class StockPlacementFilter(django_filters.FilterSet):
    warehouse = django_filters.NumberFilter(field_name="warehouse_id")
    product = django_filters.NumberFilter(field_name="product_id")
    order = django_filters.NumberFilter(field_name="order_id")
    created_after = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="gte"
    )
    created_before = django_filters.IsoDateTimeFilter(
        field_name="created_at", lookup_expr="lte"
    )

    class Meta:
        model = StockPlacement
        fields = [
            "warehouse",
            "product",
            "order",
            "created_after",
            "created_before",
        ]
