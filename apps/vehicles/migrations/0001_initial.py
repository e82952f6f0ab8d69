import django.core.validators
import django.db.models.deletion
from decimal import Decimal
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("catalog", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("make", models.CharField(max_length=100, verbose_name="Make")),
                ("model", models.CharField(max_length=100, verbose_name="Model")),
                (
                    "year",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1950),
                            django.core.validators.MaxValueValidator(2100),
                        ],
                        verbose_name="Year",
                    ),
                ),
                (
                    "vehicle_type",
                    models.CharField(
                        choices=[
                            ("sedan", "Sedan"),
                            ("suv", "SUV"),
                            ("hatchback", "Hatchback"),
                            ("van", "Van"),
                            ("pickup", "Pickup"),
                            ("bus", "Bus"),
                            ("luxury", "Luxury"),
                            ("other", "Other"),
                        ],
                        default="sedan",
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("location", models.CharField(blank=True, max_length=255, verbose_name="Location")),
                ("description", models.TextField(blank=True, verbose_name="Description")),
                ("images", models.JSONField(blank=True, default=list, verbose_name="Images")),
                ("features", models.JSONField(blank=True, default=list, verbose_name="Features")),
                ("is_available", models.BooleanField(default=True, verbose_name="Available")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "owner",
                    models.ForeignKey(
                        editable=False,
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vehicles",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["owner"], name="vehicle_owner_idx"),
                    models.Index(fields=["is_available"], name="vehicle_available_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="VehicleServicePrice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "base_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                        verbose_name="Base price",
                    ),
                ),
                (
                    "total_price",
                    models.DecimalField(
                        decimal_places=2,
                        help_text="Price charged to renters, service charge included.",
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                        verbose_name="Total price",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "service",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="vehicle_prices",
                        to="catalog.serviceoffering",
                    ),
                ),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="service_prices",
                        to="vehicles.vehicle",
                    ),
                ),
            ],
            options={
                "verbose_name": "Vehicle service price",
                "verbose_name_plural": "Vehicle service prices",
                "ordering": ["service__sort_order", "service__name"],
                "constraints": [
                    models.UniqueConstraint(fields=("vehicle", "service"), name="unique_vehicle_service")
                ],
            },
        ),
    ]
