from __future__ import annotations

from typing import Any, Optional, Sequence

from ..attendance.aggregator import CalendarSummary, RosterSummary
from ..attendance.model import CalendarDay, RosterEntry
from ..calendar_grid.builder import DaySlot
from ..catalog.cascade import SelectionCascade
from ..catalog.index import CourseHierarchyIndex


def catalog_to_dict(index: CourseHierarchyIndex) -> list[dict[str, Any]]:
    return [
        {
            "id": c.id,
            "name": c.name,
            "years": [{"name": y.name, "sections": [s.name for s in y.sections]} for y in c.years],
        }
        for c in index.courses
    ]


def selection_to_dict(cascade: SelectionCascade) -> dict[str, Any]:
    state = cascade.state
    return {
        "courseIndex": state.course_index,
        "yearIndex": state.year_index,
        "sectionIndex": state.section_index,
        "years": [y.name for y in cascade.years()],
        "sections": [s.name for s in cascade.sections()],
    }


def slots_to_list(slots: Sequence[Optional[DaySlot]]) -> list[Optional[dict[str, Any]]]:
    return [None if s is None else {"day": s.day, "date": s.date_key} for s in slots]


def calendar_days_to_list(days: Sequence[Optional[CalendarDay]]) -> list[Optional[dict[str, Any]]]:
    return [
        None
        if d is None
        else {"day": d.day, "date": d.date_key, "events": len(d.events), "status": d.status.value if d.status else None}
        for d in days
    ]


def entry_to_dict(entry: RosterEntry) -> dict[str, Any]:
    return {
        "studentId": entry.student_id,
        "rollNumber": entry.roll_number,
        "studentName": entry.student_name,
        "fatherName": entry.father_name,
        "present": entry.present,
        "remarks": entry.remarks,
    }


def roster_summary_to_dict(summary: RosterSummary) -> dict[str, int]:
    return {"total": summary.total, "present": summary.present, "absent": summary.absent}


def calendar_summary_to_dict(summary: Optional[CalendarSummary]) -> Optional[dict[str, int]]:
    if summary is None:
        return None
    return {
        "total": summary.total,
        "present": summary.present,
        "absent": summary.absent,
        "leave": summary.leave,
        "holiday": summary.holiday,
        "percentage": summary.percentage,
    }
