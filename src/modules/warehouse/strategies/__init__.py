"""Interchangeable execution strategies for the fulfillment use case."""

from modules.warehouse.strategies.direct import DirectTransactionStrategy
from modules.warehouse.strategies.interfaces import IFulfillmentStrategy
from modules.warehouse.strategies.procedure import StoredProcedureStrategy

__all__ = [
    "IFulfillmentStrategy",
    "DirectTransactionStrategy",
    "StoredProcedureStrategy",
]
