"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any, Optional
from uuid import UUID

from tribuna.domain.error import ValidationError


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


def parse_uuid(value: str, field: str) -> UUID:
    """Parse an identifier from a request, failing as a validation error."""
    try:
        return UUID(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}") from None


def parse_optional_uuid(value: Optional[str], field: str) -> Optional[UUID]:
    return parse_uuid(value, field) if value is not None else None
