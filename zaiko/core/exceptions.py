"""
Domain Exceptions

Every error raised by the services derives from ZaikoError. The API layer maps
each class to an HTTP status via `status_code`.
"""
from typing import Optional


class ZaikoError(Exception):
    """Base class for domain errors"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class InvalidRequest(ZaikoError):
    """Non-positive quantity or a missing required reference"""
    status_code = 400


class InsufficientStock(ZaikoError):
    """Outbound quantity exceeds the quantity on hand"""
    status_code = 400

    def __init__(self, available: int, requested: int):
        super().__init__("Insufficient stock")
        self.available = available
        self.requested = requested

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "available": self.available,
            "requested": self.requested,
        }


class NotFound(ZaikoError):
    status_code = 404

    def __init__(self, entity: str, entity_id: Optional[object] = None):
        if entity_id is None:
            message = f"{entity} not found"
        else:
            message = f"{entity} {entity_id} not found"
        super().__init__(message)
        self.entity = entity
        self.entity_id = entity_id


class Conflict(ZaikoError):
    """Duplicate unique value, or delete of master data still referenced by stock"""
    status_code = 409


class MovementConflict(ZaikoError):
    """The movement could not be committed after retrying the whole unit"""
    status_code = 503


class ImmutableLedgerError(ZaikoError):
    """Raised by ORM listeners when a ledger entry is updated or deleted"""

    def __init__(self, entry_id: Optional[int], operation: str):
        super().__init__(f"Stock ledger entry {entry_id} is immutable ({operation} rejected)")
        self.entry_id = entry_id
        self.operation = operation
