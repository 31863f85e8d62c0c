from django.apps import AppConfig


class WarehouseConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "modules.warehouse"
    label = "warehouse"
    verbose_name = "Warehouse"

    def ready(self) -> None:
        from modules.warehouse.events import StockPlaced
        from modules.warehouse.handlers import stock_placed_handler
        from shared.infrastructure.bus import event_bus

        event_bus.subscribe(StockPlaced, stock_placed_handler)
