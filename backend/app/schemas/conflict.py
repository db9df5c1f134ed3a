from pydantic import BaseModel, Field


class FacultyConflict(BaseModel):
    timetable_id: str
    timetable: str  # "<department> - <semester> (<block>)"
    department: str
    semester: str
    day: str
    slot_index: int
    slot: int  # 1-based, for display


class GridValidationResult(BaseModel):
    valid: bool
    conflicts: list[str] = Field(default_factory=list)


class FacultyBooking(BaseModel):
    day: str
    slot: int
    subject: str
    timetable: str


class FacultyLoadWarning(BaseModel):
    faculty_id: str
    total_slots: int
    limit: int
    message: str


class FacultyLoadReport(BaseModel):
    limit: int
    warnings: list[FacultyLoadWarning] = Field(default_factory=list)
