from __future__ import annotations

from django.conf import settings
from django.core.management.base import BaseCommand
from django.db import DEFAULT_DB_ALIAS, connections

from modules.warehouse.procedures import (
    INSTALL_SQL,
    install_procedure,
    validate_procedure_name,
)


class Command(BaseCommand):
    help = (
        "Install the fulfillment stored procedure under the name configured "
        "in FULFILLMENT_PROCEDURE_NAME."
    )

    def add_arguments(self, parser):
        parser.add_argument(
            "--database",
            default=DEFAULT_DB_ALIAS,
            help="Database alias to install into.",
        )

    def handle(self, *args, **options):
        name = validate_procedure_name(settings.FULFILLMENT_PROCEDURE_NAME)
        connection = connections[options["database"]]

        if connection.vendor not in INSTALL_SQL:
            self.stdout.write(
                self.style.WARNING(
                    f"No stored procedure for {connection.vendor}; nothing installed."
                )
            )
            return

        with connection.schema_editor() as schema_editor:
            install_procedure(None, schema_editor)

        self.stdout.write(
            self.style.SUCCESS(f"Installed procedure '{name}' on {connection.vendor}.")
        )
