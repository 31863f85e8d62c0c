"""Warehouse repositories package."""

from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)
from modules.warehouse.repositories.interfaces import IStockPlacementRepository

__all__ = ["IStockPlacementRepository", "StockPlacementDjangoRepository"]
