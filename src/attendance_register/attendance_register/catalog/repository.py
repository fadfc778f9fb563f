from __future__ import annotations

from typing import Protocol, Sequence

from .model import Course


class CatalogRepository(Protocol):
    def list_courses(self, batch_id: str) -> Sequence[Course]:
        raise NotImplementedError
