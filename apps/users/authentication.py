"""Authentication of the trusted payment subsystem.

The payment subsystem reports outcomes by calling the booking update path
with an ``X-Payment-Signature: sha256=<hex>`` header: an HMAC-SHA256 of the
raw request body keyed with ``PAYMENT_WEBHOOK_SECRET``. A valid signature
authenticates the request as the payment-system principal, which is the only
actor granted ``booking.mark_paid``.
"""

from __future__ import annotations

import hashlib
import hmac
import logging

from django.conf import settings  # type: ignore
from rest_framework import authentication, exceptions  # type: ignore

from .permissions import PAYMENT_SYSTEM_ROLE

logger = logging.getLogger(__name__)

SIGNATURE_HEADER = "HTTP_X_PAYMENT_SIGNATURE"


class PaymentSystemPrincipal:
    """Request principal for signed payment-subsystem calls."""

    is_authenticated = True
    is_anonymous = False
    is_payment_system = True
    pk = None
    id = None
    role = PAYMENT_SYSTEM_ROLE

    def __str__(self) -> str:
        return "payment-system"


def sign_payload(body: bytes, secret: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), body, hashlib.sha256).hexdigest()
    return f"sha256={digest}"


def verify_signature(body: bytes, signature: str, secret: str) -> bool:
    if not secret or not signature:
        return False
    return hmac.compare_digest(sign_payload(body, secret), signature.strip())


class PaymentSignatureAuthentication(authentication.BaseAuthentication):
    """Authenticates requests signed by the payment subsystem."""

    def authenticate(self, request):  # type: ignore
        signature = request.META.get(SIGNATURE_HEADER)
        if not signature:
            return None

        secret = getattr(settings, "PAYMENT_WEBHOOK_SECRET", "")
        if not secret:
            logger.warning("Payment signature received but PAYMENT_WEBHOOK_SECRET is not configured")
            return None

        if not verify_signature(request.body, signature, secret):
            logger.warning(f"Invalid payment signature on {request.method} {request.path}")
            raise exceptions.AuthenticationFailed("Invalid payment signature.")

        logger.info(f"Payment subsystem authenticated for {request.method} {request.path}")
        return (PaymentSystemPrincipal(), None)
