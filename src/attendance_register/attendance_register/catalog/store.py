from __future__ import annotations

import logging
from typing import Optional

from ..core.exceptions import ValidationError
from .index import CourseHierarchyIndex
from .repository import CatalogRepository

logger = logging.getLogger(__name__)


class CatalogStore:
    """Catalog snapshots shared across screens, keyed by batch id.

    Screens build their own ``SelectionCascade`` over the shared index; the snapshot
    is only re-fetched after ``invalidate``.
    """

    def __init__(self, catalog: CatalogRepository):
        self._catalog = catalog
        self._by_batch: dict[str, CourseHierarchyIndex] = {}

    def get(self, batch_id: Optional[str]) -> CourseHierarchyIndex:
        if not batch_id:
            raise ValidationError("No batch found in user data")
        index = self._by_batch.get(batch_id)
        if index is None:
            index = CourseHierarchyIndex(self._catalog.list_courses(batch_id))
            logger.info("Loaded catalog for batch %s (%s courses)", batch_id, len(index))
            self._by_batch[batch_id] = index
        return index

    def invalidate(self, batch_id: Optional[str] = None) -> None:
        if batch_id is None:
            self._by_batch.clear()
        else:
            self._by_batch.pop(batch_id, None)
