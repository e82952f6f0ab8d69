"""API views for the booking domain."""

from __future__ import annotations

from rest_framework import permissions, status, viewsets  # type: ignore
from rest_framework.response import Response  # type: ignore

from apps.users.permissions import Actor, Capability, CapabilityPermission

from . import services
from .filters import BookingFilterSet
from .serializers import BookingCreateSerializer, BookingSerializer, BookingUpdateSerializer

TRUE_VALUES = {"1", "true", "yes"}


class BookingViewSet(viewsets.GenericViewSet):
    """Create bookings, list and read them, and drive their lifecycle."""

    serializer_class = BookingSerializer
    filterset_class = BookingFilterSet
    permission_classes = [permissions.IsAuthenticated, CapabilityPermission]
    http_method_names = ["get", "post", "patch", "delete", "head", "options"]
    required_capabilities = {
        "create": Capability.BOOKING_CREATE,
        "retrieve": Capability.BOOKING_VIEW,
        "destroy": Capability.BOOKING_DELETE,
    }

    def _actor(self) -> Actor:
        return Actor.from_principal(self.request.user)

    def get_queryset(self):  # type: ignore
        return services.list_bookings(self._actor())

    def get_serializer_context(self):  # type: ignore
        context = super().get_serializer_context()
        include_user = str(self.request.query_params.get("includeUser", "")).lower() in TRUE_VALUES
        context["include_user"] = include_user
        return context

    def list(self, request):  # type: ignore
        queryset = self.filter_queryset(self.get_queryset())
        serializer = self.get_serializer(queryset, many=True)
        return Response(serializer.data)

    def retrieve(self, request, pk=None):  # type: ignore
        booking = services.get_booking_for(pk, self._actor())
        return Response(self.get_serializer(booking).data)

    def create(self, request):  # type: ignore
        serializer = BookingCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        booking = services.create_booking(request.user, **serializer.validated_data)
        data = BookingSerializer(booking, context=self.get_serializer_context()).data
        return Response(data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):  # type: ignore
        serializer = BookingUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        actor = self._actor()

        if data.get("payment_status"):
            booking = services.mark_paid(
                pk,
                actor,
                expected_version=data.get("version"),
                payment_reference=data.get("payment_reference") or None,
            )
        else:
            booking = services.change_status(pk, actor, data["status"], expected_version=data.get("version"))
        return Response(BookingSerializer(booking, context=self.get_serializer_context()).data)

    def destroy(self, request, pk=None):  # type: ignore
        version = request.query_params.get("version")
        if version is None and hasattr(request.data, "get"):
            version = request.data.get("version")
        services.delete_booking(pk, self._actor(), expected_version=version)
        return Response(status=status.HTTP_204_NO_CONTENT)
