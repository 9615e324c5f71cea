class DomainError(Exception):
    """Base class for errors the desk or API should show to the user."""


class ValidationError(DomainError):
    """Bad input: missing fields, unknown type, day outside the event, duplicates."""


class NotFoundError(DomainError):
    """No registrant matches the given identifier."""


class ConflictError(DomainError):
    """Check-in state does not allow the change (already / not checked in)."""
