"""Load the default service catalog."""

from __future__ import annotations

from decimal import Decimal

from django.core.management.base import BaseCommand  # type: ignore
from django.db import transaction  # type: ignore

from apps.catalog.models import ServiceOffering

DEFAULT_SERVICE_TYPES = [
    {
        "code": "airport",
        "name": "Airport Transfer",
        "description": "Pick-up or drop-off at the airport with a driver.",
        "pricing_unit": ServiceOffering.PricingUnit.PER_TRIP,
        "default_price": Decimal("150.00"),
        "icon": "plane",
        "sort_order": 1,
    },
    {
        "code": "daily",
        "name": "Daily Rental",
        "description": "Self-drive or chauffeured hire by the day.",
        "pricing_unit": ServiceOffering.PricingUnit.PER_DAY,
        "default_price": Decimal("200.00"),
        "icon": "car",
        "sort_order": 2,
    },
    {
        "code": "out-of-town",
        "name": "Out of Town",
        "description": "Trips outside the city, priced by the day.",
        "pricing_unit": ServiceOffering.PricingUnit.PER_DAY,
        "default_price": Decimal("300.00"),
        "icon": "map",
        "sort_order": 3,
    },
    {
        "code": "hourly",
        "name": "Hourly Hire",
        "description": "Short errands and meetings, priced by the hour.",
        "pricing_unit": ServiceOffering.PricingUnit.PER_HOUR,
        "default_price": Decimal("50.00"),
        "icon": "clock",
        "sort_order": 4,
    },
]


class Command(BaseCommand):
    help = "Create the default service types. Existing codes are left untouched."

    @transaction.atomic
    def handle(self, *args, **options):  # type: ignore
        created = 0
        for entry in DEFAULT_SERVICE_TYPES:
            defaults = {key: value for key, value in entry.items() if key != "code"}
            _, was_created = ServiceOffering.objects.get_or_create(code=entry["code"], defaults=defaults)
            created += int(was_created)
        self.stdout.write(
            self.style.SUCCESS(
                f"Service types: {created} created, {len(DEFAULT_SERVICE_TYPES) - created} already present"
            )
        )
