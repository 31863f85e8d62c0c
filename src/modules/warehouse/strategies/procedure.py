"""Stored-procedure strategy: the fulfillment flow run inside the database.

The procedure (installed by migration ``warehouse.0002``) receives the
product id, warehouse id, amount and the request timestamp, and returns
the new stock placement id.  It signals business-rule violations with a
``FULFILLMENT:<reason>`` error message; those become the matching
``FulfillmentRejected`` subclass.  Every other database error, and a
missing return value, is a ``StorageFailure``.

The ``StockPlaced`` outbox row is written in the same transaction as the
call, so a committed placement always has its event.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

import structlog
from django.conf import settings
from django.db import DEFAULT_DB_ALIAS, DatabaseError, connections, transaction

from modules.warehouse.constants import (
    PROCEDURE_ERROR_MARKER,
    FulfillmentStrategyName,
)
from modules.warehouse.dtos import AddProductToWarehouseDTO
from modules.warehouse.exceptions import (
    FulfillmentRejected,
    StorageFailure,
    rejection_for_reason,
)
from modules.warehouse.fulfillment import record_stock_placed
from modules.warehouse.procedures import CALL_TEMPLATES, validate_procedure_name
from modules.warehouse.repositories.django_repository import (
    StockPlacementDjangoRepository,
)
from modules.warehouse.repositories.interfaces import IStockPlacementRepository
from modules.warehouse.strategies.interfaces import IFulfillmentStrategy

logger = structlog.get_logger(__name__)

_REJECTION = re.compile(re.escape(PROCEDURE_ERROR_MARKER) + r"([a-z][a-z-]*)")


def rejection_from_error(exc: DatabaseError) -> Optional[FulfillmentRejected]:
    """Map a procedure error to a rejection, or ``None`` if it is not one."""
    found = _REJECTION.search(str(exc))
    if found is None:
        return None
    return rejection_for_reason(found.group(1))


class StoredProcedureStrategy(IFulfillmentStrategy):
    name = FulfillmentStrategyName.PROCEDURE.value

    def __init__(
        self,
        procedure_name: Optional[str] = None,
        using: str = DEFAULT_DB_ALIAS,
        stock_placement_repository: Optional[IStockPlacementRepository] = None,
    ) -> None:
        self._procedure_name = validate_procedure_name(
            procedure_name or settings.FULFILLMENT_PROCEDURE_NAME
        )
        self._using = using
        self._placement_repo = (
            stock_placement_repository or StockPlacementDjangoRepository()
        )

    @property
    def procedure_name(self) -> str:
        return self._procedure_name

    def execute(self, request: AddProductToWarehouseDTO, now: datetime) -> int:
        connection = connections[self._using]
        log = logger.bind(
            procedure=self._procedure_name,
            vendor=connection.vendor,
            product_id=request.product_id,
            warehouse_id=request.warehouse_id,
        )

        template = CALL_TEMPLATES.get(connection.vendor)
        if template is None:
            log.error("fulfillment.procedure_unsupported")
            raise StorageFailure(
                f"Stored procedure '{self._procedure_name}' is not available "
                f"on {connection.vendor}."
            )

        params = [
            request.product_id,
            request.warehouse_id,
            request.amount,
            connection.ops.adapt_datetimefield_value(now),
        ]

        try:
            with transaction.atomic(using=self._using):
                with connection.cursor() as cursor:
                    cursor.execute(template.format(name=self._procedure_name), params)
                    row = cursor.fetchone()

                if row is None or row[0] is None:
                    log.error("fulfillment.procedure_returned_nothing")
                    raise StorageFailure(
                        f"Stored procedure '{self._procedure_name}' "
                        f"did not return a new id."
                    )

                placement = self._placement_repo.get_by_id(int(row[0]))
                if placement is None:
                    log.error("fulfillment.placement_missing", stock_placement_id=row[0])
                    raise StorageFailure(
                        f"Stock placement {row[0]} returned by "
                        f"'{self._procedure_name}' does not exist."
                    )

                record_stock_placed(placement)
        except DatabaseError as exc:
            rejection = rejection_from_error(exc)
            if rejection is not None:
                log.info("fulfillment.procedure_rejected", reason=rejection.reason)
                raise rejection from exc
            log.error("fulfillment.storage_failure", error=str(exc))
            raise StorageFailure(str(exc)) from exc

        log.info("fulfillment.committed", stock_placement_id=placement.id)
        return placement.id
