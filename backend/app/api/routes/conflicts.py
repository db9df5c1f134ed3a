from fastapi import APIRouter, Depends, Query

from app.api.deps import get_conflict_oracle
from app.schemas.conflict import FacultyConflict
from app.services.conflict_oracle import ConflictOracle

router = APIRouter()


@router.get("/check", response_model=list[FacultyConflict])
def check_faculty_conflicts(
    day: str = Query(min_length=1, max_length=20),
    slot_index: int = Query(ge=0, le=100),
    faculty_id: str = Query(min_length=1, max_length=100),
    oracle: ConflictOracle = Depends(get_conflict_oracle),
) -> list[FacultyConflict]:
    return oracle.check_conflicts(day, slot_index, faculty_id)
