from types import SimpleNamespace

import pytest

from app.core.config import Settings
from app.core.exceptions import InputValidationError
from app.schemas.timetable import SlotContent
from app.services.grid import (
    GridLayout,
    check_grid_shape,
    empty_grid,
    grid_from_slots,
    iter_filled_cells,
    render_grid,
)


def _cell(faculty_id: str = "F1") -> SlotContent:
    return SlotContent(subject="Maths", faculty_name="Dr. Rao", faculty_id=faculty_id)


def test_layout_from_default_settings():
    layout = GridLayout.from_settings(Settings(database_url="sqlite+pysqlite://"))
    assert layout.days == ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
    assert layout.slots_per_day == 10
    assert layout.break_index == 3
    assert layout.slot_label(0) == "8:00 - 8:50"


def test_settings_reject_break_outside_day():
    with pytest.raises(ValueError):
        Settings(database_url="sqlite+pysqlite://", slots_per_day=4, break_slot_index=4, slot_timings=[])


def test_empty_grid_shape(layout):
    grid = empty_grid(layout)
    assert list(grid) == list(layout.days)
    assert all(cells == [None] * 10 for cells in grid.values())


def test_fallback_days_keep_configured_order(layout):
    assert layout.fallback_days("Wednesday") == ["Monday", "Tuesday", "Thursday", "Friday", "Saturday"]


def test_iter_filled_cells_skips_break(layout):
    grid = empty_grid(layout)
    grid["Monday"][0] = _cell()
    grid["Monday"][3] = _cell()
    assert [(day, index) for day, index, _ in iter_filled_cells(grid, layout)] == [("Monday", 0)]


def test_check_grid_shape_rejects_bad_grids(layout):
    grid = empty_grid(layout)
    check_grid_shape(grid, layout)

    with pytest.raises(InputValidationError):
        check_grid_shape({"Sunday": [None] * 10}, layout)
    with pytest.raises(InputValidationError):
        check_grid_shape({"Monday": [None] * 9}, layout)

    grid["Friday"][3] = _cell()
    with pytest.raises(InputValidationError, match="break slot"):
        check_grid_shape(grid, layout)


def test_grid_from_slots_skips_unknown_positions(layout):
    rows = [
        SimpleNamespace(day="Monday", slot_number=0, subject="Maths", faculty_id="F1", course_code="MA1"),
        SimpleNamespace(day="Monday", slot_number=3, subject="Maths", faculty_id="F1", course_code="MA1"),
        SimpleNamespace(day="Monday", slot_number=12, subject="Maths", faculty_id="F1", course_code="MA1"),
        SimpleNamespace(day="Sunday", slot_number=1, subject="Maths", faculty_id="F1", course_code="MA1"),
    ]
    grid = grid_from_slots(rows, layout, {"F1": "Dr. Rao"})
    assert grid["Monday"][0].faculty_name == "Dr. Rao"
    assert grid["Monday"][0].course_code == "MA1"
    assert grid["Monday"][3] is None
    assert sum(cell is not None for cells in grid.values() for cell in cells) == 1


def test_render_grid_shows_break_label(layout):
    grid = empty_grid(layout)
    grid["Tuesday"][1] = _cell("F9")
    rendered = render_grid(grid, layout)
    assert rendered.headers[3] == "Break"
    assert rendered.headers[0] == "Slot 1"
    tuesday = next(row for row in rendered.rows if row.day == "Tuesday")
    assert tuesday.cells[1] == "Maths (Dr. Rao) [F9]"
    assert tuesday.cells[3] == "Break"
    assert tuesday.cells[0] == ""
