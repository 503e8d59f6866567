"""Shared domain error messages and error types."""

from typing import Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class MissingFieldError(ValidationError):
    """A required field was not provided."""

    def __init__(self, entity: str, field: str):
        self.entity = entity
        self.field = field
        super().__init__(missing_field(entity, field))


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    def __init__(self, entity: str, entity_id: str):
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(entity_not_found(entity, entity_id))


def entity_not_found(entity: str, entity_id: str) -> str:
    """Return message for a missing record."""
    return f"{entity.capitalize()} '{entity_id}' not found"


def missing_field(entity: str, field: str) -> str:
    """Return message for a required field left empty."""
    return f"Missing required {entity} field '{field}'"


def unknown_patch_fields(patch_name: str, names: Sequence[str]) -> str:
    """Return message for patch keys that do not exist on the entity."""
    return f"Unknown field{'s' if len(names) != 1 else ''} for {patch_name}: {', '.join(names)}"


def invalid_window(window_months: int, allowed: Sequence[int]) -> str:
    """Return message for an unsupported insights window."""
    options = ", ".join(str(value) for value in allowed)
    return f"Unsupported window of {window_months} months (choose one of {options})"


def invalid_choice(field: str, value: object, allowed: Sequence[str]) -> str:
    """Return message for a value outside an enumeration."""
    return f"Invalid {field} '{value}' (choose one of {', '.join(allowed)})"
