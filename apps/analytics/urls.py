"""URL routing for analytics endpoints."""

from django.urls import path  # type: ignore

from .views import DailyBookingsView, DailyRevenueView, OverviewAnalyticsView

app_name = "analytics"

urlpatterns = [
    # Do not prefix with 'analytics/' here; the prefix is defined in config.urls
    path('overview/', OverviewAnalyticsView.as_view(), name='overview'),
    path('bookings/daily/', DailyBookingsView.as_view(), name='bookings-daily'),
    path('revenue/daily/', DailyRevenueView.as_view(), name='revenue-daily'),
]
