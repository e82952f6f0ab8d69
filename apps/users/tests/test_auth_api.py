"""API tests for authentication endpoints."""

from __future__ import annotations

import json

from django.test import override_settings
from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.authentication import sign_payload
from apps.users.models import User


class AuthAPITests(APITestCase):
    def test_register_returns_tokens(self) -> None:
        payload = {
            "email": "renter@example.com",
            "phone": "+233201234567",
            "first_name": "Ama",
            "last_name": "Mensah",
            "password": "StrongPass123",
        }

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertIn("access", response.data["tokens"])
        self.assertEqual(response.data["user"]["email"], payload["email"])
        self.assertEqual(response.data["user"]["role"], User.RoleChoices.USER)
        self.assertTrue(User.objects.filter(email=payload["email"]).exists())

    def test_register_as_owner(self) -> None:
        payload = {"email": "owner@example.com", "password": "StrongPass123", "role": "owner"}

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(User.objects.get(email="owner@example.com").role, User.RoleChoices.OWNER)

    def test_register_cannot_claim_admin_role(self) -> None:
        payload = {"email": "sneaky@example.com", "password": "StrongPass123", "role": "admin"}

        response = self.client.post(reverse("auth:register"), payload, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertFalse(User.objects.filter(email="sneaky@example.com").exists())

    def test_obtain_token_and_me(self) -> None:
        User.objects.create_user(email="kofi@example.com", password="StrongPass123")

        token_response = self.client.post(
            reverse("auth:token_obtain_pair"),
            {"email": "kofi@example.com", "password": "StrongPass123"},
            format="json",
        )
        self.assertEqual(token_response.status_code, status.HTTP_200_OK, token_response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {token_response.data['access']}")
        me_response = self.client.get(reverse("auth:me"))

        self.assertEqual(me_response.status_code, status.HTTP_200_OK, me_response.data)
        self.assertEqual(me_response.data["email"], "kofi@example.com")

    def test_me_requires_authentication(self) -> None:
        response = self.client.get(reverse("auth:me"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class PaymentSignatureAuthenticationTests(APITestCase):
    """Signed calls authenticate as the payment subsystem."""

    def _signed_get(self, signature: str):
        return self.client.generic(
            "GET",
            reverse("auth:me"),
            data="",
            content_type="application/json",
            HTTP_X_PAYMENT_SIGNATURE=signature,
        )

    def test_valid_signature_authenticates_payment_system(self) -> None:
        response = self._signed_get(sign_payload(b"", "test-payment-secret"))

        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["role"], "payment_system")

    def test_invalid_signature_is_rejected(self) -> None:
        response = self._signed_get(sign_payload(b"", "wrong-secret"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_signature_must_cover_body(self) -> None:
        body = json.dumps({"paymentStatus": "paid"})
        response = self.client.generic(
            "GET",
            reverse("auth:me"),
            data=body,
            content_type="application/json",
            HTTP_X_PAYMENT_SIGNATURE=sign_payload(b"{}", "test-payment-secret"),
        )

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    @override_settings(PAYMENT_WEBHOOK_SECRET="")
    def test_signature_ignored_without_secret(self) -> None:
        response = self._signed_get(sign_payload(b"", "test-payment-secret"))

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
