from __future__ import annotations

from collections.abc import Iterable

from app.schemas.conflict import FacultyLoadWarning
from app.schemas.timetable import CourseInput

DEFAULT_MAX_WEEKLY_SLOTS = 10


def faculty_slot_totals(courses: Iterable[CourseInput]) -> dict[str, int]:
    totals: dict[str, int] = {}
    for course in courses:
        if course.faculty_id and course.slots > 0:
            totals[course.faculty_id] = totals.get(course.faculty_id, 0) + course.slots
    return totals


def faculty_load_warnings(
    courses: Iterable[CourseInput],
    limit: int = DEFAULT_MAX_WEEKLY_SLOTS,
) -> list[FacultyLoadWarning]:
    """Flag faculty whose requested weekly slots exceed ``limit``.

    Advisory only: looks at the course list being edited, never at saved timetables.
    """
    warnings: list[FacultyLoadWarning] = []
    for faculty_id, total in faculty_slot_totals(courses).items():
        if total > limit:
            warnings.append(
                FacultyLoadWarning(
                    faculty_id=faculty_id,
                    total_slots=total,
                    limit=limit,
                    message=f"Faculty {faculty_id} has {total} slots (max {limit} allowed)",
                )
            )
    return warnings
