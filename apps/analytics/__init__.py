"""Administrator statistics over bookings and listings."""
