import random
from collections.abc import Generator

from fastapi import Depends
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.db.session import SessionLocal
from app.services.conflict_oracle import ConflictOracle
from app.services.grid import GridLayout


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_layout(settings: Settings = Depends(get_settings)) -> GridLayout:
    return GridLayout.from_settings(settings)


def get_conflict_oracle(db: Session = Depends(get_db)) -> ConflictOracle:
    return ConflictOracle(db)


def get_rng(settings: Settings = Depends(get_settings)) -> random.Random:
    return random.Random(settings.random_seed)
