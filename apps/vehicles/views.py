"""API views for the vehicle listing."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.decorators import action  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import Actor, Capability, CapabilityPermission, require_capability

from . import services
from .filters import VehicleFilterSet
from .serializers import (
    ServicePriceInputSerializer,
    ServicePriceUpdateSerializer,
    VehicleSerializer,
    VehicleServicePriceSerializer,
    VehicleWriteSerializer,
)


class VehicleViewSet(viewsets.GenericViewSet):
    """Public vehicle search plus owner management of vehicles and their service prices."""

    serializer_class = VehicleSerializer
    filterset_class = VehicleFilterSet
    required_capabilities = {
        "create": Capability.VEHICLE_CREATE,
        "update": Capability.VEHICLE_MANAGE,
        "partial_update": Capability.VEHICLE_MANAGE,
        "destroy": Capability.VEHICLE_MANAGE,
        "attach_service": Capability.VEHICLE_MANAGE,
        "service_detail": Capability.VEHICLE_MANAGE,
    }

    def get_permissions(self):  # type: ignore
        if self.action in {"list", "retrieve"}:
            return [permissions.AllowAny()]
        return [permissions.IsAuthenticated(), CapabilityPermission()]

    def get_queryset(self):  # type: ignore
        return services.list_public()

    def _actor(self) -> Actor:
        return Actor.from_principal(self.request.user)

    def _managed_vehicle(self, pk):
        vehicle = services.get_vehicle(pk)
        require_capability(self._actor(), Capability.VEHICLE_MANAGE, vehicle)
        return vehicle

    def _read(self, vehicle, status_code=status.HTTP_200_OK) -> Response:
        vehicle = services.get_vehicle(vehicle.pk)
        return Response(VehicleSerializer(vehicle, context=self.get_serializer_context()).data, status=status_code)

    def list(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):  # type: ignore
        return Response(self.get_serializer(services.get_vehicle(pk)).data)

    @action(detail=False, methods=["get"])
    def mine(self, request):  # type: ignore
        serializer = self.get_serializer(services.list_for_owner(self._actor()), many=True)
        return Response(serializer.data)

    def create(self, request):  # type: ignore
        serializer = VehicleWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        service_prices = data.pop("services", [])
        images = data.pop("images", [])
        vehicle = services.create_vehicle(request.user, data, images=images, services=service_prices)
        return self._read(vehicle, status.HTTP_201_CREATED)

    def update(self, request, pk=None, partial=False):  # type: ignore
        vehicle = self._managed_vehicle(pk)
        serializer = VehicleWriteSerializer(vehicle, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        data.pop("services", None)
        vehicle = services.update_vehicle(vehicle, self._actor(), data)
        return self._read(vehicle)

    def partial_update(self, request, pk=None):  # type: ignore
        return self.update(request, pk=pk, partial=True)

    def destroy(self, request, pk=None):  # type: ignore
        vehicle = services.get_vehicle(pk)
        services.delete_vehicle(vehicle, self._actor())
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["post"], url_path="services")
    def attach_service(self, request, pk=None):  # type: ignore
        vehicle = self._managed_vehicle(pk)
        serializer = ServicePriceInputSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = dict(serializer.validated_data)
        entry = services.attach_service(
            vehicle,
            self._actor(),
            data.pop("service_code"),
            base_price=data["base_price"],
            total_price=data.get("total_price"),
            is_active=data.get("is_active", True),
        )
        body = VehicleServicePriceSerializer(entry, context=self.get_serializer_context()).data
        return Response(body, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["patch", "delete"], url_path=r"services/(?P<service_code>[^/.]+)")
    def service_detail(self, request, pk=None, service_code=None):  # type: ignore
        vehicle = self._managed_vehicle(pk)
        if request.method == "DELETE":
            services.detach_service(vehicle, self._actor(), service_code)
            return Response(status=status.HTTP_204_NO_CONTENT)

        serializer = ServicePriceUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = services.update_service_price(vehicle, self._actor(), service_code, dict(serializer.validated_data))
        return Response(VehicleServicePriceSerializer(entry, context=self.get_serializer_context()).data)
