import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from app.db.base import Base


class Timetable(Base):
    __tablename__ = "timetables"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    department: Mapped[str] = mapped_column(String(200), nullable=False)
    semester: Mapped[str] = mapped_column(String(100), nullable=False)
    block: Mapped[str] = mapped_column(String(100), nullable=False)
    classroom: Mapped[str] = mapped_column(String(100), nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(36), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    slots: Mapped[list["TimetableSlot"]] = relationship(back_populates="timetable")

    @property
    def label(self) -> str:
        return f"{self.department} - {self.semester} ({self.block})"


class TimetableSlot(Base):
    __tablename__ = "timetable_slots"
    __table_args__ = (
        Index("ix_timetable_slots_day_slot_faculty", "day", "slot_number", "faculty_id"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    timetable_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("timetables.id", ondelete="CASCADE"), index=True, nullable=False
    )
    day: Mapped[str] = mapped_column(String(20), nullable=False)
    slot_number: Mapped[int] = mapped_column(Integer, nullable=False)
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    faculty_id: Mapped[str] = mapped_column(String(100), nullable=False)
    course_code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    timetable: Mapped[Timetable] = relationship(back_populates="slots")
