from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Section:
    name: str


@dataclass(frozen=True)
class Year:
    """A class/grade level of a course (e.g. '2024-25' or 'Grade 5')."""

    name: str
    sections: tuple[Section, ...] = ()


@dataclass(frozen=True)
class Course:
    """Domain entity: one course of the running batch with its years and sections."""

    id: str
    name: str
    years: tuple[Year, ...] = ()
    code: Optional[str] = None
    grade: Optional[str] = None

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Course":
        years = tuple(
            Year(
                name=str(y.get("name") or ""),
                sections=tuple(Section(name=str(s.get("name") or "")) for s in (y.get("sections") or [])),
            )
            for y in (raw.get("years") or [])
        )
        return cls(
            id=str(raw.get("id") or ""),
            name=str(raw.get("name") or ""),
            years=years,
            code=raw.get("code"),
            grade=raw.get("grade"),
        )
