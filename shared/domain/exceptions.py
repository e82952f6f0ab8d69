"""
Domain Error Taxonomy

Every failure the marketplace core reports to its callers is one of the
kinds below. Each kind carries its HTTP status and a stable machine code so
clients can tell "not allowed" from "not found" from "bad input".

- NotFoundError: missing vehicle, booking or service code
- ConflictError: duplicate catalog entry or vehicle/service pairing
- InvalidTransitionError: transition not defined from the current status
- StaleWriteError: caller's booking version is out of date
- UnpricedError: vehicle has no active price for the requested service
- ForbiddenError: actor lacks the capability for the operation
- ValidationError: missing or malformed input, start date after end date
"""

from __future__ import annotations


class DomainError(Exception):
    """Base class for errors raised by domain services."""

    status_code = 500
    code = "domain_error"
    default_message = "Domain error."

    def __init__(self, message: str | None = None, **context) -> None:
        self.message = message or self.default_message
        self.context = context
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class NotFoundError(DomainError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found."


class ConflictError(DomainError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists."


class InvalidTransitionError(ConflictError):
    code = "invalid_transition"
    default_message = "Transition is not allowed from the current status."

    def __init__(self, current: str, transition: str) -> None:
        super().__init__(
            f"Cannot {transition} a booking with status '{current}'.",
            current=current,
            transition=transition,
        )
        self.current = current
        self.transition = transition


class StaleWriteError(ConflictError):
    code = "stale_write"
    default_message = "Booking was modified by someone else. Reload and retry."


class ForbiddenError(DomainError):
    status_code = 403
    code = "forbidden"
    default_message = "You are not allowed to perform this action."


class ValidationError(DomainError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid input."


class UnpricedError(ConflictError):
    code = "unpriced"
    default_message = "The vehicle does not offer the requested service."
