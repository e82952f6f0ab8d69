import django.core.validators
from decimal import Decimal
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="ServiceOffering",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("code", models.SlugField(unique=True, verbose_name="Code")),
                ("name", models.CharField(max_length=100, unique=True, verbose_name="Name")),
                ("description", models.TextField(verbose_name="Description")),
                (
                    "pricing_unit",
                    models.CharField(
                        choices=[
                            ("per_day", "Per day"),
                            ("per_hour", "Per hour"),
                            ("per_trip", "Per trip"),
                            ("per_km", "Per kilometre"),
                        ],
                        default="per_day",
                        max_length=20,
                        verbose_name="Pricing unit",
                    ),
                ),
                (
                    "default_price",
                    models.DecimalField(
                        decimal_places=2,
                        max_digits=10,
                        validators=[django.core.validators.MinValueValidator(Decimal("0.00"))],
                        verbose_name="Default price",
                    ),
                ),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("icon", models.CharField(default="car", max_length=50, verbose_name="Icon")),
                ("sort_order", models.PositiveIntegerField(default=0, verbose_name="Sort order")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Service offering",
                "verbose_name_plural": "Service offerings",
                "ordering": ["sort_order", "name"],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(("default_price__gte", 0)),
                        name="service_offering_price_non_negative",
                    )
                ],
            },
        ),
    ]
