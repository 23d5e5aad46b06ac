"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DataAccessError(RuntimeError):
    """Storage failure (connectivity, query error) surfaced to callers.

    Not a DomainError: callers should treat it as a server-side failure.
    """


def invalid_period(value: object) -> str:
    """Return message for an unrecognized period kind."""
    return f"Invalid period '{value}'. Supported periods: month, quarter, year"


def entity_type_not_found(entity_type_id: int) -> str:
    """Return message for missing entity type."""
    return f"Entity type {entity_type_id} not found"


def entity_not_found(entity_id: int) -> str:
    """Return message for missing entity."""
    return f"Entity {entity_id} not found"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def duplicate_entity_type(name: str) -> str:
    """Return message for duplicate entity type name."""
    return f"Entity type with name '{name}' already exists"


def empty_name(kind: str) -> str:
    """Return message for a blank name."""
    return f"{kind} name must not be empty"


def invalid_amount(value: object) -> str:
    """Return message for an amount that is not a finite number."""
    return f"Invalid amount: {value!r}"


def amount_out_of_range(value: object, max_integer_digits: int) -> str:
    """Return message for an amount too large to store."""
    return f"Amount {value!r} exceeds {max_integer_digits} digits before the decimal point"
