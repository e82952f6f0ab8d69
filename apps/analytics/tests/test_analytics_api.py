"""API tests for administrator statistics."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

from django.urls import reverse
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from apps.bookings.models import Booking
from apps.users.models import User
from apps.vehicles.models import Vehicle


class AnalyticsAPITests(APITestCase):
    def setUp(self) -> None:
        self.admin = User.objects.create_user(
            email="admin@example.com",
            password="AdminPass123",
            role=User.RoleChoices.ADMIN,
        )
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.OWNER,
        )
        self.vehicle = Vehicle.objects.create(owner=self.owner, make="Toyota", model="Corolla")
        self._booking(datetime(2025, 4, 1, 10, 0), Booking.Status.COMPLETED, Decimal("250.00"))
        self._booking(datetime(2025, 4, 1, 15, 0), Booking.Status.COMPLETED, Decimal("180.00"))
        self._booking(datetime(2025, 4, 1, 16, 0), Booking.Status.PENDING, Decimal("999.00"))
        self._booking(datetime(2025, 4, 2, 9, 0), Booking.Status.CANCELLED, Decimal("100.00"))

    def _booking(self, created: datetime, booking_status: str, total: Decimal) -> Booking:
        booking = Booking.objects.create(
            renter=self.owner,
            vehicle=self.vehicle,
            start_date=date(2025, 5, 1),
            end_date=date(2025, 5, 1),
            service_code="daily",
            pricing_unit="per_day",
            unit_price=total,
            quantity=Decimal("1"),
            base_price=total,
            total_price=total,
            status=booking_status,
        )
        Booking.objects.filter(pk=booking.pk).update(created_at=timezone.make_aware(created))
        return booking

    def test_daily_booking_counts(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("analytics:bookings-daily"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"2025-04-01": 3, "2025-04-02": 1})

    def test_daily_revenue_counts_completed_only(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("analytics:revenue-daily"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data, {"2025-04-01": Decimal("430.00")})

    def test_overview(self) -> None:
        self.client.force_authenticate(self.admin)

        response = self.client.get(reverse("analytics:overview"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["bookings"], 4)
        self.assertEqual(response.data["bookings_by_status"]["completed"], 2)
        self.assertEqual(response.data["bookings_by_status"]["declined"], 0)
        self.assertEqual(response.data["revenue"], Decimal("430.00"))

    def test_stats_are_admin_only(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse("analytics:bookings-daily"))

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

        self.client.force_authenticate(None)
        self.assertEqual(self.client.get(reverse("analytics:revenue-daily")).status_code, status.HTTP_401_UNAUTHORIZED)
