"""Unit tests for installing the fulfillment procedure under its configured name."""

from __future__ import annotations

from io import StringIO
from unittest import mock

import pytest
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command

from modules.warehouse.procedures import (
    install_procedure,
    uninstall_procedure,
    validate_procedure_name,
)

pytestmark = pytest.mark.unit


def _schema_editor(vendor):
    editor = mock.Mock()
    editor.connection.vendor = vendor
    return editor


def _executed(editor):
    return [c.args[0] for c in editor.execute.call_args_list]


class TestInstall:
    @pytest.mark.parametrize("vendor", ["postgresql", "mysql"])
    def test_uses_configured_name(self, settings, vendor):
        settings.FULFILLMENT_PROCEDURE_NAME = "place_stock_v2"
        editor = _schema_editor(vendor)

        install_procedure(None, editor)

        statements = _executed(editor)
        assert statements
        assert any("place_stock_v2(" in sql for sql in statements)
        assert not any("add_product_to_warehouse" in sql for sql in statements)
        assert not any("{name}" in sql for sql in statements)

    def test_default_name(self):
        editor = _schema_editor("postgresql")

        install_procedure(None, editor)

        assert "FUNCTION add_product_to_warehouse(" in _executed(editor)[0]

    def test_sqlite_installs_nothing(self):
        editor = _schema_editor("sqlite")

        install_procedure(None, editor)

        editor.execute.assert_not_called()

    def test_invalid_name_raises(self, settings):
        settings.FULFILLMENT_PROCEDURE_NAME = "x; DROP TABLE orders"
        editor = _schema_editor("postgresql")

        with pytest.raises(ImproperlyConfigured):
            install_procedure(None, editor)
        editor.execute.assert_not_called()


class TestUninstall:
    @pytest.mark.parametrize(
        "vendor, expected",
        [
            ("postgresql", "DROP FUNCTION IF EXISTS place_stock_v2(bigint"),
            ("mysql", "DROP PROCEDURE IF EXISTS place_stock_v2"),
        ],
    )
    def test_drops_configured_name(self, settings, vendor, expected):
        settings.FULFILLMENT_PROCEDURE_NAME = "place_stock_v2"
        editor = _schema_editor(vendor)

        uninstall_procedure(None, editor)

        assert _executed(editor)[0].startswith(expected)


class TestValidateProcedureName:
    def test_accepts_identifier(self):
        assert validate_procedure_name("_place_stock2") == "_place_stock2"

    @pytest.mark.parametrize("name", ["", "1proc", "a.b", "proc()", "a b"])
    def test_rejects(self, name):
        with pytest.raises(ImproperlyConfigured):
            validate_procedure_name(name)


class TestInstallCommand:
    def test_installs_with_schema_editor(self):
        conn = mock.MagicMock()
        conn.vendor = "postgresql"
        editor = conn.schema_editor.return_value.__enter__.return_value
        editor.connection.vendor = "postgresql"
        out = StringIO()

        with mock.patch(
            "modules.warehouse.management.commands."
            "install_fulfillment_procedure.connections",
            {"default": conn},
        ):
            call_command("install_fulfillment_procedure", stdout=out)

        assert editor.execute.called
        assert "Installed procedure 'add_product_to_warehouse'" in out.getvalue()

    def test_unsupported_vendor_is_noop(self):
        conn = mock.MagicMock()
        conn.vendor = "sqlite"
        out = StringIO()

        with mock.patch(
            "modules.warehouse.management.commands."
            "install_fulfillment_procedure.connections",
            {"default": conn},
        ):
            call_command("install_fulfillment_procedure", stdout=out)

        conn.schema_editor.assert_not_called()
        assert "nothing installed" in out.getvalue()
