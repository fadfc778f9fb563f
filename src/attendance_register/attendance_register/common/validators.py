from __future__ import annotations

from typing import Sequence, TypeVar

from ..core.exceptions import ValidationError

T = TypeVar("T")


def require_non_empty(value: str | None, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"Please select {field_name}")
    return value.strip()


def require_index(items: Sequence[T], index: int, field_name: str) -> T:
    if index < 0 or index >= len(items):
        raise ValidationError(f"Invalid {field_name} selection: {index}")
    return items[index]
