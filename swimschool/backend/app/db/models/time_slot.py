from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import (
    CheckConstraint,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    JSON,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base


class SlotStatus(str, PyEnum):
    available = "available"
    booked = "booked"
    cancelled = "cancelled"


class LessonType(str, PyEnum):
    private = "private"
    group = "group"


class TimeSlot(Base):
    __tablename__ = "time_slots"
    __table_args__ = (
        CheckConstraint("max_capacity >= 1", name="ck_time_slot_max_capacity_positive"),
        CheckConstraint(
            "current_capacity >= 0 AND current_capacity <= max_capacity",
            name="ck_time_slot_capacity_bounds",
        ),
        Index("ix_time_slot_instructor_date", "instructor_id", "date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    # no cascade: schedule views tolerate a missing instructor
    instructor_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    start_time: Mapped[str] = mapped_column(String(5), nullable=False)
    end_time: Mapped[str] = mapped_column(String(5), nullable=False)
    lesson_type: Mapped[LessonType] = mapped_column(Enum(LessonType), nullable=False)
    swim_styles: Mapped[list] = mapped_column(JSON, default=list)
    max_capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    current_capacity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[SlotStatus] = mapped_column(Enum(SlotStatus), default=SlotStatus.available)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    instructor = relationship("User")
    lessons = relationship("Lesson", back_populates="time_slot", order_by="Lesson.id")

    @property
    def lesson_ids(self) -> list[int]:
        return [lesson.id for lesson in self.lessons]

    @property
    def is_full(self) -> bool:
        return self.current_capacity >= self.max_capacity
