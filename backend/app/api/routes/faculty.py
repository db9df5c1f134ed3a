from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from app.api.deps import get_conflict_oracle, get_db
from app.models.faculty import Faculty
from app.schemas.conflict import FacultyBooking
from app.schemas.faculty import FacultyOut
from app.services.conflict_oracle import ConflictOracle

router = APIRouter()


@router.get("/", response_model=list[FacultyOut])
def list_faculty(db: Session = Depends(get_db)) -> list[FacultyOut]:
    return list(db.execute(select(Faculty).order_by(Faculty.faculty_id)).scalars())


@router.get("/{faculty_id}/availability", response_model=list[FacultyBooking])
def get_faculty_availability(
    faculty_id: str,
    oracle: ConflictOracle = Depends(get_conflict_oracle),
) -> list[FacultyBooking]:
    return oracle.faculty_availability(faculty_id)
