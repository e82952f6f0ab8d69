"""Bookings app package.

This app encapsulates the booking lifecycle: server-side pricing of booking
requests into frozen quotes, the status and payment state machine, and the
optimistic concurrency that turns racing confirm/cancel calls into
detectable conflicts.
"""
