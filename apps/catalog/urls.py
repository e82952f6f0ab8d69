"""URL routing for the service catalog."""

from __future__ import annotations

from django.urls import include, path  # type: ignore
from rest_framework.routers import DefaultRouter  # type: ignore

from .views import ServiceOfferingViewSet

router = DefaultRouter()
router.register(r"", ServiceOfferingViewSet, basename="service-type")

urlpatterns = [
    path("", include(router.urls)),
]
