from app.models.faculty import Faculty  # noqa: F401
from app.models.timetable import Timetable, TimetableSlot  # noqa: F401
