from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictCheckError
from app.models.timetable import Timetable, TimetableSlot
from app.schemas.conflict import FacultyBooking, FacultyConflict, GridValidationResult
from app.schemas.timetable import WeeklyGrid
from app.services.grid import GridLayout, iter_filled_cells

logger = logging.getLogger(__name__)


class ConflictOracle:
    """Answers faculty double-booking questions from the saved timetable slots.

    The collision domain is global: a faculty id booked on a day and slot in any
    saved timetable conflicts, regardless of department or semester.
    """

    def __init__(self, db: Session):
        self.db = db

    def check_conflicts(self, day: str, slot_index: int, faculty_id: str) -> list[FacultyConflict]:
        stmt = (
            select(TimetableSlot, Timetable)
            .join(Timetable, TimetableSlot.timetable_id == Timetable.id)
            .where(
                TimetableSlot.day == day,
                TimetableSlot.slot_number == slot_index,
                TimetableSlot.faculty_id == faculty_id,
            )
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error(
                "FACULTY CONFLICT CHECK FAILED | day=%s | slot=%s | faculty_id=%s | error=%s",
                day,
                slot_index,
                faculty_id,
                exc,
            )
            raise ConflictCheckError() from exc

        return [
            FacultyConflict(
                timetable_id=timetable.id,
                timetable=timetable.label,
                department=timetable.department,
                semester=timetable.semester,
                day=day,
                slot_index=slot_index,
                slot=slot_index + 1,
            )
            for _, timetable in rows
        ]

    def validate_grid(self, grid: WeeklyGrid, layout: GridLayout) -> GridValidationResult:
        # Errors propagate: a grid that cannot be checked must not be saved.
        conflicts: list[str] = []
        for day, index, cell in iter_filled_cells(grid, layout):
            existing = self.check_conflicts(day, index, cell.faculty_id)
            if existing:
                conflicts.append(
                    f"{cell.faculty_id} is already teaching on {day} slot {index + 1} in {existing[0].timetable}"
                )
        return GridValidationResult(valid=not conflicts, conflicts=conflicts)

    def faculty_availability(self, faculty_id: str) -> list[FacultyBooking]:
        stmt = (
            select(TimetableSlot, Timetable)
            .join(Timetable, TimetableSlot.timetable_id == Timetable.id)
            .where(TimetableSlot.faculty_id == faculty_id)
            .order_by(TimetableSlot.day, TimetableSlot.slot_number)
        )
        try:
            rows = self.db.execute(stmt).all()
        except SQLAlchemyError:
            logger.exception("Error fetching faculty availability for %s", faculty_id)
            return []
        return [
            FacultyBooking(
                day=slot.day,
                slot=slot.slot_number + 1,
                subject=slot.subject,
                timetable=timetable.label,
            )
            for slot, timetable in rows
        ]
