import pytest

from src.attendance_register.attendance_register.catalog.model import Course
from src.attendance_register.attendance_register.catalog.store import CatalogStore
from src.attendance_register.attendance_register.core.exceptions import ValidationError


def test_catalog_is_fetched_once_per_batch(catalog_store, catalog_repo):
    first = catalog_store.get("batch-1")
    second = catalog_store.get("batch-1")
    catalog_store.get("batch-2")

    assert first is second
    assert catalog_repo.calls == ["batch-1", "batch-2"]


def test_invalidate_forces_refetch(catalog_store, catalog_repo):
    catalog_store.get("batch-1")
    catalog_store.get("batch-2")

    catalog_store.invalidate("batch-1")
    catalog_store.get("batch-1")
    catalog_store.get("batch-2")
    assert catalog_repo.calls == ["batch-1", "batch-2", "batch-1"]

    catalog_store.invalidate()
    catalog_store.get("batch-2")
    assert catalog_repo.calls[-1] == "batch-2"
    assert len(catalog_repo.calls) == 4


@pytest.mark.parametrize("batch_id", [None, ""])
def test_missing_batch_is_rejected(catalog_store, catalog_repo, batch_id):
    with pytest.raises(ValidationError, match="No batch"):
        catalog_store.get(batch_id)
    assert catalog_repo.calls == []


def test_course_from_api_builds_hierarchy():
    course = Course.from_api(
        {
            "id": 11,
            "name": "Grade 5",
            "grade": "5",
            "batchId": "batch-1",
            "years": [
                {"name": "2024-25", "sections": [{"name": "A"}, {"name": "B"}]},
                {"name": "2025-26", "sections": None},
            ],
        }
    )

    assert course.id == "11"
    assert [y.name for y in course.years] == ["2024-25", "2025-26"]
    assert [s.name for s in course.years[0].sections] == ["A", "B"]
    assert course.years[1].sections == ()
