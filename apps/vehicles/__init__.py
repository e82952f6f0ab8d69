"""Vehicles app package.

Owners list vehicles and choose which catalog services each vehicle offers,
at vehicle-specific prices.
"""
