import logging
import random
from datetime import datetime, timezone
from time import perf_counter

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_conflict_oracle, get_db, get_layout, get_rng
from app.core.config import Settings, get_settings
from app.core.exceptions import FacultyOverloadError
from app.schemas.conflict import FacultyLoadReport, GridValidationResult
from app.schemas.timetable import (
    FacultyLoadRequest,
    GenerateTimetableRequest,
    GenerateTimetableResponse,
    SaveTimetableRequest,
    SaveTimetableResponse,
    TimetableDetailOut,
    TimetableOut,
    TimetableSlotOut,
    ValidateGridRequest,
)
from app.services import timetable_store
from app.services.conflict_oracle import ConflictOracle
from app.services.grid import GridLayout, check_grid_shape, grid_from_slots, render_grid
from app.services.placement import PlacementEngine
from app.services.session_state import remember_generated, remember_inputs, remember_saved
from app.services.workload import faculty_load_warnings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/faculty-load", response_model=FacultyLoadReport)
def check_faculty_load(
    payload: FacultyLoadRequest,
    settings: Settings = Depends(get_settings),
) -> FacultyLoadReport:
    limit = settings.faculty_max_weekly_slots
    return FacultyLoadReport(limit=limit, warnings=faculty_load_warnings(payload.courses, limit))


@router.post("/generate", response_model=GenerateTimetableResponse)
def generate_timetable(
    payload: GenerateTimetableRequest,
    settings: Settings = Depends(get_settings),
    layout: GridLayout = Depends(get_layout),
    oracle: ConflictOracle = Depends(get_conflict_oracle),
    rng: random.Random = Depends(get_rng),
) -> GenerateTimetableResponse:
    inputs = timetable_store.prepare_inputs(payload.inputs)

    load_warnings = [
        item.message for item in faculty_load_warnings(inputs.courses, settings.faculty_max_weekly_slots)
    ]
    if load_warnings and not payload.confirm_overload:
        raise FacultyOverloadError(load_warnings)

    started = perf_counter()
    logger.info(
        "TIMETABLE GENERATION START | department=%s | semester=%s | courses=%s | overload_confirmed=%s",
        inputs.department,
        inputs.semester,
        len(inputs.courses),
        bool(load_warnings),
    )
    engine = PlacementEngine(oracle=oracle, layout=layout, rng=rng)
    result = engine.generate(inputs.courses)
    generated_at = datetime.now(timezone.utc)
    logger.info(
        "TIMETABLE GENERATION COMPLETE | department=%s | semester=%s | unplaced=%s | check_warnings=%s | wall_ms=%s",
        inputs.department,
        inputs.semester,
        len(result.unplaced),
        len(result.check_warnings),
        int((perf_counter() - started) * 1000),
    )

    session = remember_generated(payload.session, inputs, result.grid, generated_at)
    return GenerateTimetableResponse(
        timetable=result.grid,
        unplaced=result.unplaced,
        check_warnings=result.check_warnings,
        load_warnings=load_warnings,
        generated_at=generated_at,
        session=session,
    )


@router.post("/validate", response_model=GridValidationResult)
def validate_timetable(
    payload: ValidateGridRequest,
    layout: GridLayout = Depends(get_layout),
    oracle: ConflictOracle = Depends(get_conflict_oracle),
) -> GridValidationResult:
    check_grid_shape(payload.timetable, layout)
    return oracle.validate_grid(payload.timetable, layout)


@router.post("/", response_model=SaveTimetableResponse, status_code=status.HTTP_201_CREATED)
def save_timetable(
    payload: SaveTimetableRequest,
    db: Session = Depends(get_db),
    layout: GridLayout = Depends(get_layout),
    oracle: ConflictOracle = Depends(get_conflict_oracle),
) -> SaveTimetableResponse:
    inputs = timetable_store.prepare_inputs(payload.inputs)
    timetable_id = timetable_store.save_timetable(
        db,
        oracle=oracle,
        inputs=inputs,
        grid=payload.timetable,
        layout=layout,
    )
    session = remember_saved(remember_inputs(payload.session, inputs), timetable_id)
    return SaveTimetableResponse(id=timetable_id, session=session)


@router.get("/", response_model=list[TimetableOut])
def list_timetables(db: Session = Depends(get_db)) -> list[TimetableOut]:
    return timetable_store.list_timetables(db)


@router.get("/{timetable_id}", response_model=TimetableDetailOut)
def get_timetable(
    timetable_id: str,
    db: Session = Depends(get_db),
    layout: GridLayout = Depends(get_layout),
) -> TimetableDetailOut:
    timetable, slots = timetable_store.get_timetable(db, timetable_id)
    names = timetable_store.faculty_names(db, {slot.faculty_id for slot in slots})
    grid = grid_from_slots(slots, layout, names)
    return TimetableDetailOut(
        timetable=TimetableOut.model_validate(timetable),
        slots=[TimetableSlotOut.model_validate(slot) for slot in slots],
        grid=grid,
        rendered=render_grid(grid, layout),
    )
