from __future__ import annotations

from typing import Iterable, Optional, Sequence

from .model import Course, Section, Year


class CourseHierarchyIndex:
    """Immutable course -> year -> section catalog with bounds-checked lookups.

    Every lookup returns ``None`` or an empty tuple for an out-of-range index; none raise.
    """

    def __init__(self, courses: Iterable[Course]):
        self._courses: tuple[Course, ...] = tuple(courses)
        self._by_id = {c.id: c for c in self._courses}

    def __len__(self) -> int:
        return len(self._courses)

    def __bool__(self) -> bool:
        return bool(self._courses)

    @property
    def courses(self) -> Sequence[Course]:
        return self._courses

    def course(self, course_index: int) -> Optional[Course]:
        if 0 <= course_index < len(self._courses):
            return self._courses[course_index]
        return None

    def course_by_id(self, course_id: str) -> Optional[Course]:
        return self._by_id.get(course_id)

    def years(self, course_index: int) -> Sequence[Year]:
        course = self.course(course_index)
        return course.years if course else ()

    def year(self, course_index: int, year_index: int) -> Optional[Year]:
        years = self.years(course_index)
        if 0 <= year_index < len(years):
            return years[year_index]
        return None

    def sections(self, course_index: int, year_index: int) -> Sequence[Section]:
        year = self.year(course_index, year_index)
        return year.sections if year else ()

    def section(self, course_index: int, year_index: int, section_index: int) -> Optional[Section]:
        sections = self.sections(course_index, year_index)
        if 0 <= section_index < len(sections):
            return sections[section_index]
        return None
