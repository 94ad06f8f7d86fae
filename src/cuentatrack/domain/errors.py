"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Missing or invalid input, detected before contacting the boundary."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class FetchError(DomainError):
    """Loading data from the boundary failed or returned malformed data."""


class OperationFailed(DomainError):
    """A mutation was rejected by the boundary.

    The message is meant to be shown to the operator verbatim.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def account_not_in_status(account_id: int, status: str, expected: str) -> str:
    """Return message for an account in the wrong lifecycle status."""
    return f"Account {account_id} is {status}, expected {expected}"


def tipo_mismatch(old_id: int, old_tipo: str, new_id: int, new_tipo: str) -> str:
    """Return message when a replacement candidate has a different account type."""
    return (
        f"Account {new_id} is {new_tipo} and cannot replace "
        f"account {old_id} ({old_tipo})"
    )


def required_field(field: str) -> str:
    """Return message for a missing required input."""
    return f"{field} is required"
