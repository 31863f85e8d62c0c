"""Warehouse URL configuration."""

from __future__ import annotations

from rest_framework.routers import DefaultRouter

from modules.warehouse.views import StockPlacementViewSet, WarehouseViewSet

router = DefaultRouter(trailing_slash=True)
router.register("warehouse", WarehouseViewSet, basename="warehouse")
router.register("stock-placements", StockPlacementViewSet, basename="stock-placement")

urlpatterns = router.urls
