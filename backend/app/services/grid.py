from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from app.core.config import Settings
from app.core.exceptions import InputValidationError
from app.schemas.timetable import RenderedDay, RenderedGrid, SlotContent, WeeklyGrid


@dataclass(frozen=True)
class GridLayout:
    days: tuple[str, ...]
    slots_per_day: int
    break_index: int
    slot_timings: tuple[str, ...] = ()
    break_label: str = "Break"

    @classmethod
    def from_settings(cls, settings: Settings) -> "GridLayout":
        return cls(
            days=tuple(settings.timetable_days),
            slots_per_day=settings.slots_per_day,
            break_index=settings.break_slot_index,
            slot_timings=tuple(settings.slot_timings),
            break_label=settings.break_label,
        )

    def is_break(self, index: int) -> bool:
        return index == self.break_index

    def fallback_days(self, first_day: str) -> list[str]:
        return [day for day in self.days if day != first_day]

    def slot_label(self, index: int) -> str:
        if 0 <= index < len(self.slot_timings):
            return self.slot_timings[index]
        return f"Slot {index + 1}"


def empty_grid(layout: GridLayout) -> WeeklyGrid:
    return {day: [None] * layout.slots_per_day for day in layout.days}


def check_grid_shape(grid: WeeklyGrid, layout: GridLayout) -> None:
    unknown = sorted(day for day in grid if day not in layout.days)
    if unknown:
        raise InputValidationError(
            f"Unknown day(s) in timetable: {', '.join(unknown)}",
            details={"allowed_days": list(layout.days)},
        )
    for day, cells in grid.items():
        if len(cells) != layout.slots_per_day:
            raise InputValidationError(
                f"{day} must have exactly {layout.slots_per_day} slots",
                details={"day": day, "received": len(cells)},
            )
        if cells[layout.break_index] is not None:
            raise InputValidationError(
                f"{day} has content in the break slot",
                details={"day": day, "slot": layout.break_index + 1},
            )


def iter_filled_cells(grid: WeeklyGrid, layout: GridLayout) -> Iterable[tuple[str, int, SlotContent]]:
    for day in layout.days:
        for index, cell in enumerate(grid.get(day, [])):
            if cell is None or layout.is_break(index):
                continue
            yield day, index, cell


def grid_from_slots(
    slots: Iterable,
    layout: GridLayout,
    faculty_names: dict[str, str] | None = None,
) -> WeeklyGrid:
    names = faculty_names or {}
    grid = empty_grid(layout)
    for slot in slots:
        if slot.day not in grid:
            continue
        if not 0 <= slot.slot_number < layout.slots_per_day or layout.is_break(slot.slot_number):
            continue
        grid[slot.day][slot.slot_number] = SlotContent(
            subject=slot.subject,
            faculty_name=names.get(slot.faculty_id, slot.faculty_id),
            faculty_id=slot.faculty_id,
            course_code=slot.course_code,
        )
    return grid


def render_grid(grid: WeeklyGrid, layout: GridLayout) -> RenderedGrid:
    headers = [
        layout.break_label if layout.is_break(index) else layout.slot_label(index)
        for index in range(layout.slots_per_day)
    ]
    rows: list[RenderedDay] = []
    for day in layout.days:
        cells = grid.get(day) or [None] * layout.slots_per_day
        rendered: list[str] = []
        for index, cell in enumerate(cells):
            if layout.is_break(index):
                rendered.append(layout.break_label)
            else:
                rendered.append(cell.render() if cell is not None else "")
        rows.append(RenderedDay(day=day, cells=rendered))
    return RenderedGrid(headers=headers, rows=rows)
