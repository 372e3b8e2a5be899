"""
Domain errors raised by the trip services and their storage/mail adapters.

The request boundary maps each kind to a status code (see ``journey.main``);
the services themselves know nothing about HTTP.
"""

from typing import Optional


class JourneyError(Exception):
    """Base class for every error the services raise on purpose."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class ValidationError(JourneyError):
    """Malformed or missing input, rejected before any side effect."""


class NotFoundError(JourneyError):
    """A referenced trip, participant or activity does not exist."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} not found")


class AlreadyConfirmedError(JourneyError):
    """Confirmation attempted on an entity that is already confirmed."""

    def __init__(self, entity: str, entity_id):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity.capitalize()} already confirmed")


class StorageError(JourneyError):
    """The storage backend failed (connection, driver or transaction error)."""

    def __init__(self, operation: str, entity_id: Optional[object] = None):
        self.operation = operation
        self.entity_id = entity_id
        target = f" for {entity_id}" if entity_id is not None else ""
        super().__init__(f"Storage failure during {operation}{target}")


class NotificationError(JourneyError):
    """Sending a notification failed. Logged by the dispatcher, never returned to callers."""

    def __init__(self, operation: str, trip_id, reason: str):
        self.operation = operation
        self.trip_id = trip_id
        self.reason = reason
        super().__init__(f"{operation} failed for trip {trip_id}: {reason}")
