"""
domain.exceptions - Custom exception hierarchy for the health log.

All domain-level errors inherit from DomainError so callers can catch
broad or specific exceptions as needed.
"""


class DomainError(Exception):
    """Base exception for all domain-level errors."""


class SchemaError(DomainError):
    """Raised when a category table cannot be created."""


class StoreIOError(DomainError):
    """Raised when a database read or write fails."""


class NotFoundError(DomainError):
    """Raised when an update or delete targets an id that does not exist."""

    def __init__(self, category: str, record_id: int):
        super().__init__(f"No {category} record with id {record_id}.")
        self.category = category
        self.record_id = record_id


class ValidationError(DomainError):
    """Raised when user input fails a field rule.

    Only the first violated rule is reported; ``field`` names it and the
    message is meant to be shown to the user as-is.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class ExportError(DomainError):
    """Raised when a report cannot be rendered or shared."""
