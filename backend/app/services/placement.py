from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Protocol

from app.core.exceptions import ConflictCheckError
from app.schemas.conflict import FacultyConflict
from app.schemas.timetable import CourseInput, SlotContent, WeeklyGrid
from app.services.grid import GridLayout, empty_grid

logger = logging.getLogger(__name__)

CONFLICT_CHECK_FAILED_WARNING = "Unable to verify faculty availability. Please try again."


class SlotConflictChecker(Protocol):
    def check_conflicts(self, day: str, slot_index: int, faculty_id: str) -> list[FacultyConflict]: ...


@dataclass
class PlacementResult:
    grid: WeeklyGrid
    unplaced: list[str] = field(default_factory=list)
    check_warnings: list[str] = field(default_factory=list)


class PlacementEngine:
    """Greedy random placement of course slots into a weekly grid.

    Each block goes on a random day; if it does not fit there the remaining days
    are tried in configured order. Nothing is ever moved once placed, and a
    course that runs out of days is reported and left partially placed.
    """

    def __init__(
        self,
        *,
        oracle: SlotConflictChecker,
        layout: GridLayout,
        rng: random.Random | None = None,
    ) -> None:
        self.oracle = oracle
        self.layout = layout
        self.random = rng or random.Random()

    def generate(self, courses: Sequence[CourseInput]) -> PlacementResult:
        result = PlacementResult(grid=empty_grid(self.layout))

        for course in courses:
            remaining = course.slots
            block_size = course.block_size
            content = SlotContent.for_course(course)

            while remaining > 0:
                to_place = min(block_size, remaining)
                first_day = self.random.choice(self.layout.days)
                placed = self._place_block(first_day, content, to_place, result)
                if not placed:
                    for day in self.layout.fallback_days(first_day):
                        if self._place_block(day, content, to_place, result):
                            placed = True
                            break

                if not placed:
                    result.unplaced.append(
                        f"Could not place all slots for {course.subject} ({course.faculty_id}) due to conflicts"
                    )
                    logger.info(
                        "COURSE UNPLACED | course_code=%s | faculty_id=%s | remaining=%s | block=%s",
                        course.course_code,
                        course.faculty_id,
                        remaining,
                        to_place,
                    )
                    break
                remaining -= to_place

        return result

    def _place_block(self, day: str, content: SlotContent, count: int, result: PlacementResult) -> bool:
        cells = result.grid[day]
        for start in range(len(cells)):
            if self.layout.is_break(start):
                continue
            if self._window_fits(day, start, count, content.faculty_id, result):
                for index in range(start, start + count):
                    cells[index] = content
                return True
        return False

    def _window_fits(self, day: str, start: int, count: int, faculty_id: str, result: PlacementResult) -> bool:
        cells = result.grid[day]
        for index in range(start, start + count):
            if index >= len(cells) or cells[index] is not None or self.layout.is_break(index):
                return False
            if self._has_conflict(day, index, faculty_id, result):
                return False
        return True

    def _has_conflict(self, day: str, index: int, faculty_id: str, result: PlacementResult) -> bool:
        try:
            return bool(self.oracle.check_conflicts(day, index, faculty_id))
        except ConflictCheckError as exc:
            # Fail open: the slot is used as if it were free.
            logger.warning(
                "CONFLICT CHECK SKIPPED | day=%s | slot=%s | faculty_id=%s | reason=%s",
                day,
                index,
                faculty_id,
                exc.message,
            )
            if CONFLICT_CHECK_FAILED_WARNING not in result.check_warnings:
                result.check_warnings.append(CONFLICT_CHECK_FAILED_WARNING)
            return False
