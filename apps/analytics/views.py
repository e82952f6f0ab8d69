"""API views for analytics.

Administrator-only aggregates: daily booking counts, daily revenue from
completed bookings and a platform overview.
"""

from __future__ import annotations

from rest_framework.permissions import IsAuthenticated  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import APIView  # type: ignore

from apps.users.permissions import Capability, CapabilityPermission

from . import services


class AdminStatsView(APIView):
    permission_classes = [IsAuthenticated, CapabilityPermission]
    required_capability = Capability.STATS_VIEW


class DailyBookingsView(AdminStatsView):
    """``{YYYY-MM-DD: count}`` of bookings by creation day."""

    def get(self, request, format=None):  # type: ignore
        return Response(services.daily_booking_counts())


class DailyRevenueView(AdminStatsView):
    """``{YYYY-MM-DD: total}`` of completed bookings by creation day."""

    def get(self, request, format=None):  # type: ignore
        return Response(services.daily_revenue())


class OverviewAnalyticsView(AdminStatsView):
    def get(self, request, format=None):  # type: ignore
        return Response(services.overview())
