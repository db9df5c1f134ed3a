from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import (
    InputValidationError,
    PersistenceError,
    ResourceNotFoundError,
    TimetableConflictError,
)
from app.models.faculty import Faculty
from app.models.timetable import Timetable, TimetableSlot
from app.schemas.timetable import TimetableInputs, WeeklyGrid
from app.services.conflict_oracle import ConflictOracle
from app.services.grid import GridLayout, check_grid_shape, iter_filled_cells

logger = logging.getLogger(__name__)

REQUIRED_INPUT_FIELDS = ("department", "semester", "block", "classroom")


def prepare_inputs(inputs: TimetableInputs) -> TimetableInputs:
    """Return the inputs with incomplete course rows dropped.

    Raises when a required header field is blank or no complete course remains.
    """
    missing = [name for name in REQUIRED_INPUT_FIELDS if not getattr(inputs, name)]
    if missing:
        raise InputValidationError(
            "Please fill in all required fields.",
            details={"missing_fields": missing},
        )
    courses = [course for course in inputs.courses if course.is_complete()]
    if not courses:
        raise InputValidationError("Please add at least one complete course.")
    return inputs.model_copy(update={"courses": courses})


def save_faculty(db: Session, inputs: TimetableInputs) -> None:
    records: dict[str, str] = {}
    for course in inputs.courses:
        if course.faculty_id:
            records[course.faculty_id] = course.faculty

    for faculty_id, faculty_name in records.items():
        existing = db.get(Faculty, faculty_id)
        if existing is None:
            db.add(Faculty(faculty_id=faculty_id, faculty_name=faculty_name, department=inputs.department))
            continue
        existing.faculty_name = faculty_name
        existing.department = inputs.department


def save_timetable(
    db: Session,
    *,
    oracle: ConflictOracle,
    inputs: TimetableInputs,
    grid: WeeklyGrid,
    layout: GridLayout,
    user_id: str | None = None,
) -> str:
    check_grid_shape(grid, layout)
    validation = oracle.validate_grid(grid, layout)
    if not validation.valid:
        logger.info(
            "TIMETABLE SAVE REJECTED | department=%s | semester=%s | conflicts=%s",
            inputs.department,
            inputs.semester,
            len(validation.conflicts),
        )
        raise TimetableConflictError(validation.conflicts)

    try:
        save_faculty(db, inputs)
        timetable = Timetable(
            department=inputs.department,
            semester=inputs.semester,
            block=inputs.block,
            classroom=inputs.classroom,
            user_id=user_id,
        )
        db.add(timetable)
        db.commit()
        db.refresh(timetable)
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Error saving timetable metadata for %s %s", inputs.department, inputs.semester)
        raise PersistenceError("Failed to save timetable") from exc

    timetable_id = timetable.id
    slots = [
        TimetableSlot(
            timetable_id=timetable_id,
            day=day,
            slot_number=index,
            subject=cell.subject,
            faculty_id=cell.faculty_id,
            course_code=cell.course_code,
        )
        for day, index, cell in iter_filled_cells(grid, layout)
    ]

    # The metadata row is already committed; a failure here leaves it without slots.
    if slots:
        try:
            db.add_all(slots)
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.exception("Error saving timetable slots for %s", timetable_id)
            raise PersistenceError(
                "Failed to save timetable slots",
                details={"timetable_id": timetable_id},
            ) from exc

    logger.info(
        "TIMETABLE SAVED | timetable_id=%s | department=%s | semester=%s | slots=%s",
        timetable_id,
        inputs.department,
        inputs.semester,
        len(slots),
    )
    return timetable_id


def list_timetables(db: Session) -> list[Timetable]:
    return list(db.execute(select(Timetable).order_by(Timetable.created_at.desc())).scalars())


def get_timetable(db: Session, timetable_id: str) -> tuple[Timetable, list[TimetableSlot]]:
    timetable = db.get(Timetable, timetable_id)
    if timetable is None:
        raise ResourceNotFoundError("Timetable", timetable_id)
    slots = list(
        db.execute(
            select(TimetableSlot)
            .where(TimetableSlot.timetable_id == timetable_id)
            .order_by(TimetableSlot.day, TimetableSlot.slot_number)
        ).scalars()
    )
    return timetable, slots


def faculty_names(db: Session, faculty_ids: set[str]) -> dict[str, str]:
    if not faculty_ids:
        return {}
    rows = db.execute(select(Faculty).where(Faculty.faculty_id.in_(faculty_ids))).scalars()
    return {item.faculty_id: item.faculty_name for item in rows}
