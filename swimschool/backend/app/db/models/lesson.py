from datetime import datetime
from enum import Enum as PyEnum
from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from ..session import Base
from .time_slot import LessonType


class LessonStatus(str, PyEnum):
    scheduled = "scheduled"
    completed = "completed"
    canceled = "canceled"


class Lesson(Base):
    __tablename__ = "lessons"
    __table_args__ = (
        UniqueConstraint("time_slot_id", name="uq_lesson_time_slot"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    time_slot_id: Mapped[int] = mapped_column(ForeignKey("time_slots.id"), nullable=False)
    instructor_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False)
    type: Mapped[LessonType] = mapped_column(Enum(LessonType), nullable=False)
    swim_style: Mapped[str] = mapped_column(String(32), nullable=False)
    status: Mapped[LessonStatus] = mapped_column(Enum(LessonStatus), default=LessonStatus.scheduled)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    time_slot = relationship("TimeSlot", back_populates="lessons")
    instructor = relationship("User")
    students = relationship(
        "LessonStudent",
        back_populates="lesson",
        cascade="all, delete-orphan",
        order_by="LessonStudent.id",
    )

    @property
    def student_ids(self) -> list[int]:
        return [student.swimmer_id for student in self.students]


class LessonStudent(Base):
    __tablename__ = "lesson_students"
    __table_args__ = (
        UniqueConstraint("lesson_id", "swimmer_id", name="uq_lesson_student"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    lesson_id: Mapped[int] = mapped_column(ForeignKey("lessons.id", ondelete="CASCADE"))
    swimmer_id: Mapped[int] = mapped_column(ForeignKey("users.id"), index=True)
    swim_style: Mapped[str] = mapped_column(String(32), nullable=False)
    joined_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    lesson = relationship("Lesson", back_populates="students")
    swimmer = relationship("User")
