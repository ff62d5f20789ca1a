from datetime import datetime
from pydantic import BaseModel

from ..models.lesson import LessonStatus
from ..models.time_slot import LessonType


class LessonBook(BaseModel):
    swimmer_id: int
    time_slot_id: int
    swim_style: str


class LessonCancel(BaseModel):
    swimmer_id: int


class LessonStatusUpdate(BaseModel):
    status: str


class LessonStudent(BaseModel):
    swimmer_id: int
    swim_style: str

    class Config:
        from_attributes = True


class Lesson(BaseModel):
    id: int
    time_slot_id: int
    instructor_id: int
    type: LessonType
    swim_style: str
    status: LessonStatus
    student_ids: list[int]
    students: list[LessonStudent] = []
    created_at: datetime | None = None

    class Config:
        from_attributes = True
