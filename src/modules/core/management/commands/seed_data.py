from __future__ import annotations

import random
from datetime import timedelta
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from modules.catalog.models import Product, Warehouse
from modules.orders.models import Order


class Command(BaseCommand):
    help = "Seed database with realistic development data."

    def add_arguments(self, parser):
        parser.add_argument(
            "--orders",
            type=int,
            default=50,
            help="Number of open orders to create.",
        )

    def handle(self, *args, **options):
        random.seed(42)
        self.stdout.write("Seeding development data...")

        products = self._seed_products()
        warehouses = self._seed_warehouses()
        orders_created = self._seed_orders(products, options["orders"])

        self.stdout.write(
            self.style.SUCCESS(
                "Seed completed: "
                f"products={len(products)}, "
                f"warehouses={len(warehouses)}, "
                f"orders={orders_created}"
            )
        )

    def _seed_products(self) -> list[Product]:
        self.stdout.write("Creating products...")
        products: list[Product] = []
        catalog = [
            ("Monitor 27\"", "Electronics", Decimal("1299.90")),
            ("Mechanical Keyboard", "Electronics", Decimal("399.90")),
            ("Gaming Mouse", "Electronics", Decimal("249.90")),
            ("Notebook 14\"", "Electronics", Decimal("3999.00")),
            ("Office Desk", "Furniture", Decimal("899.00")),
            ("Ergonomic Chair", "Furniture", Decimal("1499.00")),
            ("Bookshelf", "Furniture", Decimal("699.00")),
            ("A4 Paper", "Office", Decimal("29.90")),
            ("Blue Pen", "Office", Decimal("4.90")),
            ("Stapler", "Office", Decimal("39.90")),
        ]
        for name, category, price in catalog:
            product, _ = Product.objects.get_or_create(
                name=name,
                defaults={"description": category, "price": price},
            )
            products.append(product)
        self.stdout.write(self.style.SUCCESS("Creating products... Done!"))
        return products

    def _seed_warehouses(self) -> list[Warehouse]:
        self.stdout.write("Creating warehouses...")
        warehouses: list[Warehouse] = []
        sites = [
            ("Central", "1 Logistics Way"),
            ("North", "42 Harbour Road"),
            ("South", "7 Depot Street"),
        ]
        for name, address in sites:
            warehouse, _ = Warehouse.objects.get_or_create(
                name=name, defaults={"address": address}
            )
            warehouses.append(warehouse)
        self.stdout.write(self.style.SUCCESS("Creating warehouses... Done!"))
        return warehouses

    def _seed_orders(self, products: list[Product], count: int) -> int:
        self.stdout.write("Creating orders...")
        if not products:
            self.stdout.write(self.style.WARNING("Skipping orders (no products)."))
            return 0

        # Backdated so every seeded order is immediately fulfillable
        now = timezone.now()
        for _ in range(count):
            Order.objects.create(
                product=random.choice(products),
                amount=random.randint(1, 20),
                created_at=now - timedelta(days=random.randint(1, 30)),
            )

        self.stdout.write(self.style.SUCCESS("Creating orders... Done!"))
        return count
