from datetime import datetime

from pydantic import BaseModel


class FacultyOut(BaseModel):
    faculty_id: str
    faculty_name: str
    department: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = {"from_attributes": True}
