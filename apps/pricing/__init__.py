"""Price resolution for vehicle services.

Plain package without models: it reads the vehicle's service prices and
the service catalog and returns immutable quotes that bookings freeze.
"""
