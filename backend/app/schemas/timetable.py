from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator, model_validator

# Faculty names may hold one level of balanced parentheses, e.g. "Dr. Rao (HOD)".
FACULTY_NAME_PATTERN = re.compile(r"(?:[^()]|\([^()]*\))*")
SLOT_CONTENT_PATTERN = re.compile(
    r"^(?P<subject>.+?) \((?P<faculty_name>(?:[^()]|\([^()]*\))+)\) \[(?P<faculty_id>[^\[\]]+)\]$"
)


class CourseInput(BaseModel):
    course_code: str = Field(default="", max_length=50)
    subject: str = Field(default="", max_length=200)
    faculty: str = Field(default="", max_length=200)
    faculty_id: str = Field(default="", max_length=100)
    slots: int = Field(default=1, ge=0, le=60)
    consecutive: bool = False
    consecutive_slots: int = Field(default=1, ge=1, le=9)

    @field_validator("course_code", "subject", "faculty", "faculty_id")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @field_validator("faculty")
    @classmethod
    def check_faculty_name(cls, value: str) -> str:
        if not FACULTY_NAME_PATTERN.fullmatch(value):
            raise ValueError("faculty name may only contain balanced, non-nested parentheses")
        return value

    @model_validator(mode="after")
    def normalize_block_size(self) -> "CourseInput":
        if not self.consecutive:
            self.consecutive_slots = 1
        return self

    @property
    def block_size(self) -> int:
        return self.consecutive_slots if self.consecutive else 1

    def is_complete(self) -> bool:
        return bool(
            self.course_code and self.subject and self.faculty and self.faculty_id and self.slots > 0
        )


class TimetableInputs(BaseModel):
    department: str = Field(default="", max_length=200)
    semester: str = Field(default="", max_length=100)
    block: str = Field(default="", max_length=100)
    classroom: str = Field(default="", max_length=100)
    courses: list[CourseInput] = Field(default_factory=list, max_length=200)

    @field_validator("department", "semester", "block", "classroom")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()


class SlotContent(BaseModel):
    subject: str = Field(min_length=1, max_length=200)
    faculty_name: str = Field(min_length=1, max_length=200)
    faculty_id: str = Field(min_length=1, max_length=100)
    course_code: str | None = Field(default=None, max_length=50)

    @classmethod
    def for_course(cls, course: CourseInput) -> "SlotContent":
        return cls(
            subject=course.subject,
            faculty_name=course.faculty,
            faculty_id=course.faculty_id,
            course_code=course.course_code or None,
        )

    def render(self) -> str:
        return f"{self.subject} ({self.faculty_name}) [{self.faculty_id}]"

    @classmethod
    def parse(cls, text: str | None) -> "SlotContent | None":
        """Recover a record from a rendered cell; anything off-template yields None."""
        if not text or not text.strip():
            return None
        match = SLOT_CONTENT_PATTERN.match(text.strip())
        if match is None:
            return None
        return cls(
            subject=match.group("subject"),
            faculty_name=match.group("faculty_name").strip(),
            faculty_id=match.group("faculty_id").strip(),
        )


WeeklyGrid = dict[str, list[SlotContent | None]]


def coerce_grid(value: dict) -> dict:
    """Accept rendered strings alongside structured cells; unreadable strings become empty cells."""
    if not isinstance(value, dict):
        return value
    coerced: dict = {}
    for day, cells in value.items():
        if not isinstance(cells, list):
            coerced[day] = cells
            continue
        coerced[day] = [SlotContent.parse(cell) if isinstance(cell, str) else cell for cell in cells]
    return coerced


class GeneratedTimetable(BaseModel):
    inputs: TimetableInputs
    timetable: WeeklyGrid
    generated_at: datetime


class SessionState(BaseModel):
    inputs: TimetableInputs | None = None
    last_generated: GeneratedTimetable | None = None
    last_saved_id: str | None = None
    updated_at: datetime | None = None


class FacultyLoadRequest(BaseModel):
    courses: list[CourseInput] = Field(default_factory=list, max_length=200)


class GenerateTimetableRequest(BaseModel):
    inputs: TimetableInputs
    session: SessionState = Field(default_factory=SessionState)
    confirm_overload: bool = False


class GenerateTimetableResponse(BaseModel):
    timetable: WeeklyGrid
    unplaced: list[str] = Field(default_factory=list)
    check_warnings: list[str] = Field(default_factory=list)
    load_warnings: list[str] = Field(default_factory=list)
    generated_at: datetime
    session: SessionState


class ValidateGridRequest(BaseModel):
    timetable: WeeklyGrid

    @field_validator("timetable", mode="before")
    @classmethod
    def coerce_cells(cls, value: dict) -> dict:
        return coerce_grid(value)


class SaveTimetableRequest(BaseModel):
    inputs: TimetableInputs
    timetable: WeeklyGrid
    session: SessionState = Field(default_factory=SessionState)

    @field_validator("timetable", mode="before")
    @classmethod
    def coerce_cells(cls, value: dict) -> dict:
        return coerce_grid(value)


class SaveTimetableResponse(BaseModel):
    id: str
    session: SessionState


class TimetableOut(BaseModel):
    id: str
    department: str
    semester: str
    block: str
    classroom: str
    user_id: str | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class TimetableSlotOut(BaseModel):
    id: str
    timetable_id: str
    day: str
    slot_number: int
    subject: str
    faculty_id: str
    course_code: str | None = None

    model_config = {"from_attributes": True}


class RenderedDay(BaseModel):
    day: str
    cells: list[str]


class RenderedGrid(BaseModel):
    headers: list[str]
    rows: list[RenderedDay]


class TimetableDetailOut(BaseModel):
    timetable: TimetableOut
    slots: list[TimetableSlotOut]
    grid: WeeklyGrid
    rendered: RenderedGrid
