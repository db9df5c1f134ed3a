from __future__ import annotations

from datetime import datetime, timezone

from app.schemas.timetable import GeneratedTimetable, SessionState, TimetableInputs, WeeklyGrid


def _now() -> datetime:
    return datetime.now(timezone.utc)


def remember_inputs(state: SessionState, inputs: TimetableInputs) -> SessionState:
    return state.model_copy(update={"inputs": inputs.model_copy(deep=True), "updated_at": _now()})


def remember_generated(
    state: SessionState,
    inputs: TimetableInputs,
    grid: WeeklyGrid,
    generated_at: datetime | None = None,
) -> SessionState:
    generated = GeneratedTimetable(
        inputs=inputs.model_copy(deep=True),
        timetable={day: list(cells) for day, cells in grid.items()},
        generated_at=generated_at or _now(),
    )
    return remember_inputs(state, inputs).model_copy(update={"last_generated": generated})


def remember_saved(state: SessionState, timetable_id: str) -> SessionState:
    return state.model_copy(update={"last_saved_id": timetable_id, "updated_at": _now()})
