import pytest
from pydantic import ValidationError

from app.schemas.timetable import CourseInput, SaveTimetableRequest, SlotContent, TimetableInputs


def test_render_and_parse_round_trip():
    cell = SlotContent(subject="Data Structures", faculty_name="Dr. Smith", faculty_id="F001")
    rendered = cell.render()
    assert rendered == "Data Structures (Dr. Smith) [F001]"

    parsed = SlotContent.parse(rendered)
    assert parsed is not None
    assert parsed.subject == "Data Structures"
    assert parsed.faculty_id == "F001"
    assert parsed.faculty_name == "Dr. Smith"


def test_parse_keeps_parentheses_in_subject():
    parsed = SlotContent.parse("Networks Lab (Batch A) (Prof. Rao) [F7]")
    assert parsed is not None
    assert parsed.subject == "Networks Lab (Batch A)"
    assert parsed.faculty_name == "Prof. Rao"
    assert parsed.faculty_id == "F7"


def test_parse_rejects_off_template_content():
    assert SlotContent.parse("") is None
    assert SlotContent.parse("   ") is None
    assert SlotContent.parse(None) is None
    assert SlotContent.parse("Data Structures") is None
    assert SlotContent.parse("Data Structures (Dr. Smith)") is None


def test_block_size_forced_to_one_without_consecutive_flag():
    course = CourseInput(
        course_code="CS201",
        subject="Data Structures",
        faculty="Dr. Smith",
        faculty_id="F001",
        slots=4,
        consecutive=False,
        consecutive_slots=3,
    )
    assert course.consecutive_slots == 1
    assert course.block_size == 1

    lab = course.model_copy(update={"consecutive": True, "consecutive_slots": 3})
    assert lab.block_size == 3


def test_course_completeness():
    complete = CourseInput(course_code="C1", subject="Maths", faculty="A", faculty_id="F1", slots=2)
    assert complete.is_complete()
    assert not complete.model_copy(update={"faculty_id": ""}).is_complete()
    assert not complete.model_copy(update={"slots": 0}).is_complete()


def test_save_request_accepts_rendered_cells():
    request = SaveTimetableRequest(
        inputs=TimetableInputs(department="CSE", semester="Semester 3", block="AB1", classroom="101"),
        timetable={
            "Monday": [
                "Data Structures (Dr. Smith) [F001]",
                "not a slot",
                {"subject": "Maths", "faculty_name": "Dr. Rao", "faculty_id": "F002"},
                None,
            ]
        },
    )
    cells = request.timetable["Monday"]
    assert cells[0].faculty_id == "F001"
    assert cells[1] is None
    assert cells[2].subject == "Maths"
    assert cells[3] is None


def test_parse_reads_faculty_name_with_parentheses():
    cell = SlotContent(subject="Compilers", faculty_name="Dr. Rao (HOD)", faculty_id="F3")
    parsed = SlotContent.parse(cell.render())
    assert parsed is not None
    assert parsed.subject == "Compilers"
    assert parsed.faculty_name == "Dr. Rao (HOD)"
    assert parsed.faculty_id == "F3"


def test_course_faculty_rejects_unbalanced_parentheses():
    assert CourseInput(faculty="Dr. Rao (HOD)").faculty == "Dr. Rao (HOD)"
    with pytest.raises(ValidationError):
        CourseInput(faculty="Dr. Rao (HOD")
    with pytest.raises(ValidationError):
        CourseInput(faculty="Dr. (Rao (HOD))")
