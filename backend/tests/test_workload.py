from app.schemas.timetable import CourseInput
from app.services.workload import faculty_load_warnings, faculty_slot_totals


def _course(faculty_id: str, slots: int, code: str = "C") -> CourseInput:
    return CourseInput(course_code=code, subject="Subject", faculty="Name", faculty_id=faculty_id, slots=slots)


def test_load_warning_fires_above_limit():
    warnings = faculty_load_warnings([_course("F1", 6, "C1"), _course("F1", 5, "C2")])
    assert len(warnings) == 1
    assert warnings[0].faculty_id == "F1"
    assert warnings[0].total_slots == 11
    assert warnings[0].message == "Faculty F1 has 11 slots (max 10 allowed)"


def test_load_warning_silent_within_limit():
    assert faculty_load_warnings([_course("F1", 4, "C1"), _course("F1", 5, "C2")]) == []


def test_limit_is_inclusive():
    assert faculty_load_warnings([_course("F1", 10)]) == []


def test_custom_limit():
    warnings = faculty_load_warnings([_course("F1", 4), _course("F2", 3)], limit=3)
    assert [item.faculty_id for item in warnings] == ["F1"]
    assert warnings[0].limit == 3


def test_totals_skip_rows_without_faculty_or_slots():
    totals = faculty_slot_totals([_course("", 8), _course("F1", 0), _course("F2", 2), _course("F2", 3)])
    assert totals == {"F2": 5}
