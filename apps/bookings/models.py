"""Booking domain models for RideHub."""

from __future__ import annotations

from decimal import Decimal

from django.conf import settings  # type: ignore
from django.core.validators import MinValueValidator  # type: ignore
from django.db import models  # type: ignore
from django.utils.translation import gettext_lazy as _  # type: ignore

from shared.domain.exceptions import ValidationError

from .domain.state_machine import BookingState, PaymentStatus as PaymentAxis, Status as StatusAxis

# Quote fields captured at creation; never recomputed from current prices.
FROZEN_FIELDS = (
    "renter_id",
    "vehicle_id",
    "service_code",
    "pricing_unit",
    "unit_price",
    "quantity",
    "base_price",
    "service_charge",
    "total_price",
    "currency",
    "start_date",
    "end_date",
)


class Booking(models.Model):
    """A renter's booking of a vehicle or chauffeured trip."""

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        CONFIRMED = "confirmed", _("Confirmed")
        DECLINED = "declined", _("Declined")
        CANCELLED = "cancelled", _("Cancelled")
        COMPLETED = "completed", _("Completed")

    class PaymentStatus(models.TextChoices):
        UNPAID = "unpaid", _("Unpaid")
        PAID = "paid", _("Paid")

    renter = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="bookings",
    )
    vehicle = models.ForeignKey(
        "vehicles.Vehicle",
        on_delete=models.PROTECT,
        related_name="bookings",
    )
    start_date = models.DateField()
    end_date = models.DateField()

    service_code = models.CharField(max_length=50)
    pricing_unit = models.CharField(max_length=20)
    unit_price = models.DecimalField(max_digits=10, decimal_places=2)
    quantity = models.DecimalField(
        max_digits=8,
        decimal_places=2,
        default=Decimal("1.00"),
        validators=[MinValueValidator(Decimal("0.01"))],
    )
    base_price = models.DecimalField(max_digits=12, decimal_places=2)
    service_charge = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    total_price = models.DecimalField(
        max_digits=12,
        decimal_places=2,
        help_text=_("Frozen quote captured when the booking was created."),
    )
    currency = models.CharField(max_length=3, default="GHS")

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING,
    )
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.UNPAID,
    )
    payment_reference = models.CharField(max_length=100, null=True, blank=True)
    version = models.PositiveIntegerField(
        default=1,
        help_text=_("Incremented on every change; writers must present the version they read."),
    )

    # Trip details
    passengers = models.PositiveSmallIntegerField(null=True, blank=True)
    pickup_address = models.CharField(max_length=255, blank=True)
    dropoff_address = models.CharField(max_length=255, blank=True)
    flight_number = models.CharField(max_length=20, blank=True)
    terminal = models.CharField(max_length=20, blank=True)
    with_driver = models.BooleanField(default=False)
    is_return_trip = models.BooleanField(default=False)
    duration_hours = models.DecimalField(max_digits=6, decimal_places=2, null=True, blank=True)
    distance_km = models.DecimalField(max_digits=8, decimal_places=2, null=True, blank=True)
    notes = models.TextField(blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = _("Booking")
        verbose_name_plural = _("Bookings")
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=models.Q(start_date__lte=models.F("end_date")),
                name="booking_valid_dates",
            ),
        ]
        indexes = [
            models.Index(fields=["vehicle", "start_date", "end_date"], name="booking_vehicle_dates_idx"),
            models.Index(fields=["status"], name="booking_status_idx"),
        ]

    def __str__(self) -> str:
        return f"Booking #{self.pk} of vehicle {self.vehicle_id} ({self.status})"

    def _take_frozen_snapshot(self, field_names=FROZEN_FIELDS) -> None:
        self._frozen_snapshot = {name: getattr(self, name) for name in FROZEN_FIELDS if name in field_names}

    @classmethod
    def from_db(cls, db, field_names, values):  # type: ignore
        instance = super().from_db(db, field_names, values)
        instance._take_frozen_snapshot(field_names)
        return instance

    def save(self, *args, **kwargs):  # type: ignore
        snapshot = getattr(self, "_frozen_snapshot", None)
        if not self._state.adding and snapshot:
            changed = [name for name, value in snapshot.items() if getattr(self, name) != value]
            if changed:
                raise ValidationError(
                    f"Booking quote fields are frozen: {', '.join(sorted(changed))}.",
                    fields=changed,
                )
        super().save(*args, **kwargs)
        if snapshot is None:
            self._take_frozen_snapshot()

    @property
    def requester_id(self) -> int:
        return self.renter_id

    @property
    def vehicle_owner_id(self) -> int:
        return self.vehicle.owner_id

    @property
    def state(self) -> BookingState:
        return BookingState(
            StatusAxis(self.status),
            PaymentAxis(self.payment_status),
            self.payment_reference,
        )
