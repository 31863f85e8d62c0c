"""Database-side implementation of the fulfillment use case.

The procedure, named by ``FULFILLMENT_PROCEDURE_NAME`` (default
``add_product_to_warehouse``), takes ``(product_id, warehouse_id, amount,
created_at)``, performs the same validate / match / conditional update /
insert sequence as ``DirectTransactionStrategy`` and returns the new stock
placement id.  Business-rule violations are raised with a
``FULFILLMENT:<reason>`` message so ``StoredProcedureStrategy`` can map
them back to rejections.  The outbox row is written by the strategy in
the same transaction as the call.

Only PostgreSQL and MySQL get a procedure; on other vendors the
procedure path reports a storage failure.  After changing the configured
name, run ``manage.py install_fulfillment_procedure`` to install it under
the new name.
"""

from __future__ import annotations

import re
from typing import Dict, List

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from modules.warehouse.constants import DEFAULT_PROCEDURE_NAME

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")

POSTGRESQL_INSTALL = [
    """
CREATE OR REPLACE FUNCTION {name}(
    p_product_id bigint,
    p_warehouse_id bigint,
    p_amount integer,
    p_created_at timestamptz
) RETURNS bigint AS $$
DECLARE
    v_price numeric(10, 2);
    v_order_id bigint;
    v_new_id bigint;
BEGIN
    IF p_amount <= 0 THEN
        RAISE EXCEPTION 'FULFILLMENT:invalid-amount';
    END IF;

    SELECT price INTO v_price FROM products WHERE id = p_product_id;
    IF NOT FOUND THEN
        RAISE EXCEPTION 'FULFILLMENT:unknown-product';
    END IF;

    PERFORM 1 FROM warehouses WHERE id = p_warehouse_id;
    IF NOT FOUND THEN
        RAISE EXCEPTION 'FULFILLMENT:unknown-warehouse';
    END IF;

    SELECT id INTO v_order_id
      FROM orders
     WHERE product_id = p_product_id
       AND amount = p_amount
       AND fulfilled_at IS NULL
       AND created_at < p_created_at
     ORDER BY created_at, id
     LIMIT 1;
    IF NOT FOUND THEN
        RAISE EXCEPTION 'FULFILLMENT:no-matching-order';
    END IF;

    UPDATE orders
       SET fulfilled_at = p_created_at
     WHERE id = v_order_id
       AND fulfilled_at IS NULL;
    IF NOT FOUND THEN
        RAISE EXCEPTION 'FULFILLMENT:conflict';
    END IF;

    INSERT INTO stock_placements
        (warehouse_id, product_id, order_id, amount, price, created_at)
    VALUES
        (p_warehouse_id, p_product_id, v_order_id, p_amount,
         p_amount * v_price, p_created_at)
    RETURNING id INTO v_new_id;

    RETURN v_new_id;
END;
$$ LANGUAGE plpgsql
""",
]

POSTGRESQL_UNINSTALL = [
    "DROP FUNCTION IF EXISTS {name}"
    "(bigint, bigint, integer, timestamptz)",
]

MYSQL_INSTALL = [
    "DROP PROCEDURE IF EXISTS {name}",
    """
CREATE PROCEDURE {name}(
    IN p_product_id BIGINT,
    IN p_warehouse_id BIGINT,
    IN p_amount INT,
    IN p_created_at DATETIME(6)
)
BEGIN
    DECLARE v_price DECIMAL(10, 2) DEFAULT NULL;
    DECLARE v_order_id BIGINT DEFAULT NULL;

    IF p_amount <= 0 THEN
        SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'FULFILLMENT:invalid-amount';
    END IF;

    SELECT price INTO v_price FROM products WHERE id = p_product_id;
    IF v_price IS NULL THEN
        SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'FULFILLMENT:unknown-product';
    END IF;

    IF NOT EXISTS (SELECT 1 FROM warehouses WHERE id = p_warehouse_id) THEN
        SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'FULFILLMENT:unknown-warehouse';
    END IF;

    SELECT id INTO v_order_id
      FROM orders
     WHERE product_id = p_product_id
       AND amount = p_amount
       AND fulfilled_at IS NULL
       AND created_at < p_created_at
     ORDER BY created_at, id
     LIMIT 1;
    IF v_order_id IS NULL THEN
        SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'FULFILLMENT:no-matching-order';
    END IF;

    UPDATE orders
       SET fulfilled_at = p_created_at
     WHERE id = v_order_id
       AND fulfilled_at IS NULL;
    IF ROW_COUNT() = 0 THEN
        SIGNAL SQLSTATE '45000' SET MESSAGE_TEXT = 'FULFILLMENT:conflict';
    END IF;

    INSERT INTO stock_placements
        (warehouse_id, product_id, order_id, amount, price, created_at)
    VALUES
        (p_warehouse_id, p_product_id, v_order_id, p_amount,
         p_amount * v_price, p_created_at);

    SELECT LAST_INSERT_ID() AS new_id;
END
""",
]

MYSQL_UNINSTALL = [
    "DROP PROCEDURE IF EXISTS {name}",
]

INSTALL_SQL: Dict[str, List[str]] = {
    "postgresql": POSTGRESQL_INSTALL,
    "mysql": MYSQL_INSTALL,
}

UNINSTALL_SQL: Dict[str, List[str]] = {
    "postgresql": POSTGRESQL_UNINSTALL,
    "mysql": MYSQL_UNINSTALL,
}

# Statement used to invoke the procedure, per vendor.  ``{name}`` is a
# validated SQL identifier; the four arguments are bound parameters.
CALL_TEMPLATES: Dict[str, str] = {
    "postgresql": (
        "SELECT {name}(%s::bigint, %s::bigint, %s::integer, %s::timestamptz)"
    ),
    "mysql": "CALL {name}(%s, %s, %s, %s)",
}

def validate_procedure_name(name: str) -> str:
    """Return ``name`` if it is a plain SQL identifier.

    The name is formatted into DDL and call statements, so anything else
    is rejected up front.
    """
    if not name or not _IDENTIFIER.match(name):
        raise ImproperlyConfigured(
            f"FULFILLMENT_PROCEDURE_NAME must be a plain SQL identifier, "
            f"got {name!r}."
        )
    return name

def _run(statements: List[str], schema_editor) -> None:
    name = validate_procedure_name(
        getattr(settings, "FULFILLMENT_PROCEDURE_NAME", DEFAULT_PROCEDURE_NAME)
    )
    for statement in statements:
        schema_editor.execute(statement.format(name=name), params=None)

def install_procedure(apps, schema_editor) -> None:
    _run(INSTALL_SQL.get(schema_editor.connection.vendor, []), schema_editor)

def uninstall_procedure(apps, schema_editor) -> None:
    _run(UNINSTALL_SQL.get(schema_editor.connection.vendor, []), schema_editor)
