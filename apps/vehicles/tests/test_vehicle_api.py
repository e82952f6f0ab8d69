"""API tests for vehicle listing and service prices."""

from __future__ import annotations

from decimal import Decimal

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.catalog.models import ServiceOffering
from apps.users.models import User
from apps.vehicles.models import Vehicle, VehicleServicePrice


class VehicleAPITests(APITestCase):
    def setUp(self) -> None:
        self.owner = User.objects.create_user(
            email="owner@example.com",
            password="OwnerPass123",
            role=User.RoleChoices.OWNER,
        )
        self.other_owner = User.objects.create_user(
            email="other@example.com",
            password="OtherPass123",
            role=User.RoleChoices.OWNER,
        )
        self.renter = User.objects.create_user(email="renter@example.com", password="RenterPass123")
        self.airport = ServiceOffering.objects.create(
            code="airport",
            name="Airport Transfer",
            description="To and from the airport",
            pricing_unit=ServiceOffering.PricingUnit.PER_TRIP,
            default_price=Decimal("150.00"),
        )
        self.daily = ServiceOffering.objects.create(
            code="daily",
            name="Daily Rental",
            description="By the day",
            pricing_unit=ServiceOffering.PricingUnit.PER_DAY,
            default_price=Decimal("200.00"),
        )
        self.vehicle = Vehicle.objects.create(
            owner=self.owner,
            make="Toyota",
            model="Corolla",
            year=2020,
            location="Accra",
        )
        self.list_url = reverse("vehicle-list")

    def _attach_url(self, vehicle: Vehicle) -> str:
        return reverse("vehicle-attach-service", args=[vehicle.pk])

    def test_owner_creates_vehicle_with_services(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {
            "make": "Honda",
            "model": "Civic",
            "year": 2021,
            "type": "sedan",
            "location": "Kumasi",
            "images": ["/uploads/civic-front.jpg", "/uploads/civic-back.jpg"],
            "features": ["AC", "Bluetooth"],
            "ownerId": self.other_owner.pk,
            "services": [{"serviceCode": "daily", "basePrice": "200.00"}],
        }

        response = self.client.post(self.list_url, payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        vehicle = Vehicle.objects.get(pk=response.data["id"])
        self.assertEqual(vehicle.owner, self.owner)
        self.assertEqual(vehicle.images, payload["images"])
        entry = vehicle.service_prices.get()
        self.assertEqual(entry.total_price, Decimal("250.00"))
        self.assertEqual(response.data["services"][0]["displayPrice"], "200.00")

    def test_renter_cannot_create_vehicle(self) -> None:
        self.client.force_authenticate(self.renter)

        response = self.client.post(self.list_url, {"make": "Kia", "model": "Rio"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN, response.data)

    def test_attach_service_computes_total_with_charge(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.post(
            self._attach_url(self.vehicle),
            {"serviceCode": "airport", "basePrice": "144.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["totalPrice"], "180.00")
        self.assertEqual(response.data["serviceCharge"], "36.00")
        self.assertEqual(response.data["displayPrice"], "144.00")

    def test_attach_service_twice_conflicts(self) -> None:
        self.client.force_authenticate(self.owner)
        payload = {"serviceCode": "airport", "basePrice": "144.00", "totalPrice": "180.00"}

        first = self.client.post(self._attach_url(self.vehicle), payload, format="json")
        second = self.client.post(self._attach_url(self.vehicle), payload, format="json")

        self.assertEqual(first.status_code, status.HTTP_201_CREATED, first.data)
        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT, second.data)
        self.assertEqual(second.data["code"], "conflict")
        self.assertEqual(VehicleServicePrice.objects.filter(vehicle=self.vehicle).count(), 1)

    def test_attach_unknown_service_not_found(self) -> None:
        self.client.force_authenticate(self.owner)

        response = self.client.post(
            self._attach_url(self.vehicle),
            {"serviceCode": "helicopter", "basePrice": "10.00"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND, response.data)

    def test_non_owner_cannot_modify_vehicle(self) -> None:
        self.client.force_authenticate(self.other_owner)
        detail_url = reverse("vehicle-detail", args=[self.vehicle.pk])

        patch = self.client.patch(detail_url, {"location": "Tema"}, format="json")
        attach = self.client.post(
            self._attach_url(self.vehicle),
            {"serviceCode": "airport", "basePrice": "1.00"},
            format="json",
        )
        delete = self.client.delete(detail_url)

        self.assertEqual(patch.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(attach.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(delete.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(Vehicle.objects.filter(pk=self.vehicle.pk, location="Accra").exists())

    def test_non_owner_with_invalid_body_is_forbidden(self) -> None:
        self.client.force_authenticate(self.other_owner)
        detail_url = reverse("vehicle-detail", args=[self.vehicle.pk])

        patch = self.client.patch(detail_url, {"year": "not-a-year"}, format="json")
        attach = self.client.post(self._attach_url(self.vehicle), {"basePrice": "-5"}, format="json")

        self.assertEqual(patch.status_code, status.HTTP_403_FORBIDDEN, patch.data)
        self.assertEqual(attach.status_code, status.HTTP_403_FORBIDDEN, attach.data)

    def test_owner_updates_and_deletes_vehicle(self) -> None:
        self.client.force_authenticate(self.owner)
        detail_url = reverse("vehicle-detail", args=[self.vehicle.pk])

        patch = self.client.patch(detail_url, {"location": "Tema", "features": ["GPS"]}, format="json")
        self.assertEqual(patch.status_code, status.HTTP_200_OK, patch.data)
        self.assertEqual(patch.data["location"], "Tema")
        self.assertEqual(patch.data["features"], ["GPS"])
        self.assertEqual(patch.data["ownerId"], self.owner.pk)

        delete = self.client.delete(detail_url)
        self.assertEqual(delete.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Vehicle.objects.filter(pk=self.vehicle.pk).exists())

    def test_update_and_detach_service_price(self) -> None:
        VehicleServicePrice.objects.create(
            vehicle=self.vehicle, service=self.daily, base_price=Decimal("200"), total_price=Decimal("250")
        )
        self.client.force_authenticate(self.owner)
        url = reverse("vehicle-service-detail", args=[self.vehicle.pk, "daily"])

        patch = self.client.patch(url, {"basePrice": "240.00"}, format="json")
        self.assertEqual(patch.status_code, status.HTTP_200_OK, patch.data)
        self.assertEqual(patch.data["totalPrice"], "300.00")

        disable = self.client.patch(url, {"active": False}, format="json")
        self.assertFalse(disable.data["active"])

        delete = self.client.delete(url)
        self.assertEqual(delete.status_code, status.HTTP_204_NO_CONTENT)
        missing = self.client.delete(url)
        self.assertEqual(missing.status_code, status.HTTP_404_NOT_FOUND)

    def test_public_list_filters_by_active_service(self) -> None:
        offered = Vehicle.objects.create(owner=self.other_owner, make="Nissan", model="Urvan")
        VehicleServicePrice.objects.create(
            vehicle=offered, service=self.airport, base_price=Decimal("100"), total_price=Decimal("125")
        )
        VehicleServicePrice.objects.create(
            vehicle=self.vehicle,
            service=self.airport,
            base_price=Decimal("100"),
            total_price=Decimal("125"),
            is_active=False,
        )

        response = self.client.get(self.list_url, {"service_type": "airport"})

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data], [offered.pk])
        self.assertEqual(response.data[0]["services"][0]["displayPrice"], "125.00")

    def test_public_list_filters_by_owner_and_make(self) -> None:
        Vehicle.objects.create(owner=self.other_owner, make="Nissan", model="Urvan")

        by_owner = self.client.get(self.list_url, {"owner": self.owner.pk})
        by_make = self.client.get(self.list_url, {"make": "niss"})

        self.assertEqual([item["id"] for item in by_owner.data], [self.vehicle.pk])
        self.assertEqual(len(by_make.data), 1)
        self.assertEqual(by_make.data[0]["make"], "Nissan")

    def test_mine_lists_only_own_vehicles(self) -> None:
        Vehicle.objects.create(owner=self.other_owner, make="Nissan", model="Urvan")
        self.client.force_authenticate(self.owner)

        response = self.client.get(reverse("vehicle-mine"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual([item["id"] for item in response.data], [self.vehicle.pk])

    def test_retrieve_missing_vehicle(self) -> None:
        response = self.client.get(reverse("vehicle-detail", args=[9999]))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
