"""Input checks shared by the domain services."""

import asyncio
from enum import Enum
from typing import Optional, TypeVar

from fintrack.domain.errors import MissingFieldError, ValidationError, invalid_choice

E = TypeVar("E", bound=Enum)


def require_field(entity: str, field: str, value) -> None:
    """Raise MissingFieldError when a required value is absent or blank."""
    if value is None or (isinstance(value, str) and not value.strip()):
        raise MissingFieldError(entity, field)


def coerce_choice(enum_cls: type[E], value, field: str) -> E:
    """Convert a raw value to a member of ``enum_cls``."""
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise ValidationError(invalid_choice(field, value, allowed)) from None


def coerce_optional_choice(enum_cls: type[E], value, field: str) -> Optional[E]:
    if value is None:
        return None
    return coerce_choice(enum_cls, value, field)


async def simulate_latency(milliseconds: int, scale: float) -> None:
    """Sleep for a scaled round trip. A scale of 0 returns immediately."""
    if scale > 0:
        await asyncio.sleep(milliseconds * scale / 1000)
