from django.db import migrations

from modules.warehouse.procedures import install_procedure, uninstall_procedure


class Migration(migrations.Migration):

    dependencies = [
        ("warehouse", "0001_initial"),
    ]

    operations = [
        migrations.RunPython(install_procedure, uninstall_procedure),
    ]
