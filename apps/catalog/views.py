"""API views for the service catalog."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import Capability, CapabilityPermission

from . import services
from .serializers import ServiceOfferingSerializer, ServiceOfferingUpdateSerializer


class ServiceOfferingViewSet(viewsets.GenericViewSet):
    """Public listing of active offerings plus administrator CRUD."""

    serializer_class = ServiceOfferingSerializer
    lookup_field = "code"
    pagination_class = None
    required_capabilities = {
        "all": Capability.CATALOG_VIEW_ALL,
        "create": Capability.CATALOG_MANAGE,
        "update": Capability.CATALOG_MANAGE,
        "partial_update": Capability.CATALOG_MANAGE,
        "destroy": Capability.CATALOG_MANAGE,
    }

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [CapabilityPermission()]

    def get_queryset(self):  # type: ignore
        if self.action == "all":
            return services.list_all()
        return services.list_active()

    def list(self, request):  # type: ignore
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    def retrieve(self, request, code=None):  # type: ignore
        offering = services.get_offering(code)
        return Response(self.get_serializer(offering).data)

    @action(detail=False, methods=["get"])
    def all(self, request):  # type: ignore
        serializer = self.get_serializer(self.get_queryset(), many=True)
        return Response(serializer.data)

    def create(self, request):  # type: ignore
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        offering = services.create_offering(**serializer.validated_data)
        return Response(self.get_serializer(offering).data, status=status.HTTP_201_CREATED)

    def update(self, request, code=None, partial=False):  # type: ignore
        offering = services.get_offering(code)
        serializer = ServiceOfferingUpdateSerializer(offering, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        offering = services.update_offering(code, **serializer.validated_data)
        return Response(self.get_serializer(offering).data)

    def partial_update(self, request, code=None):  # type: ignore
        return self.update(request, code=code, partial=True)

    def destroy(self, request, code=None):  # type: ignore
        offering = services.deactivate_offering(code)
        return Response(self.get_serializer(offering).data)
