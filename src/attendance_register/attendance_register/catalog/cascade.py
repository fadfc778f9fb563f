from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Sequence

from ..common.validators import require_index
from ..core.constants import UNSELECTED
from ..core.exceptions import ValidationError
from .index import CourseHierarchyIndex
from .model import Course, Section, Year

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SelectionState:
    course_index: int = UNSELECTED
    year_index: int = UNSELECTED
    section_index: int = UNSELECTED


@dataclass(frozen=True)
class ScopeToken:
    """Request token: a fetch started under one token is only applied while it is current."""

    generation: int


class SelectionCascade:
    """(course, year, section) selection with deterministic reset rules.

    Every transition bumps the generation and notifies listeners, which is how screens
    clear their fetched register/roster data. No network calls happen here.
    """

    def __init__(self, index: CourseHierarchyIndex):
        self._index = index
        self._state = SelectionState()
        self._generation = 0
        self._listeners: list[Callable[[SelectionState], None]] = []

    @property
    def index(self) -> CourseHierarchyIndex:
        return self._index

    @property
    def state(self) -> SelectionState:
        return self._state

    @property
    def token(self) -> ScopeToken:
        return ScopeToken(self._generation)

    def is_current(self, token: ScopeToken) -> bool:
        return token.generation == self._generation

    def subscribe(self, listener: Callable[[SelectionState], None]) -> None:
        self._listeners.append(listener)

    def select_course(self, index: int) -> None:
        require_index(self._index.courses, index, "course")
        self._transition(SelectionState(course_index=index))

    def select_year(self, index: int) -> None:
        if self._state.course_index < 0:
            raise ValidationError("Please select course first")
        require_index(self.years(), index, "year")
        self._transition(SelectionState(course_index=self._state.course_index, year_index=index))

    def select_section(self, index: int) -> None:
        if self._state.year_index < 0:
            raise ValidationError("Please select year first")
        require_index(self.sections(), index, "section")
        self._transition(
            SelectionState(
                course_index=self._state.course_index,
                year_index=self._state.year_index,
                section_index=index,
            )
        )

    def clear_section(self) -> None:
        self._transition(
            SelectionState(course_index=self._state.course_index, year_index=self._state.year_index)
        )

    def reset(self) -> None:
        self._transition(SelectionState())

    def invalidate(self) -> None:
        """Make outstanding tokens stale without changing the selection."""
        self._generation += 1

    def years(self) -> Sequence[Year]:
        return self._index.years(self._state.course_index)

    def sections(self) -> Sequence[Section]:
        return self._index.sections(self._state.course_index, self._state.year_index)

    def selected_course(self) -> Optional[Course]:
        return self._index.course(self._state.course_index)

    def selected_year(self) -> Optional[Year]:
        return self._index.year(self._state.course_index, self._state.year_index)

    def selected_section(self) -> Optional[Section]:
        return self._index.section(
            self._state.course_index, self._state.year_index, self._state.section_index
        )

    def _transition(self, new_state: SelectionState) -> None:
        self._state = new_state
        self._generation += 1
        logger.debug("Selection changed to %s (generation %s)", new_state, self._generation)
        for listener in list(self._listeners):
            listener(new_state)
