from datetime import datetime
from pydantic import BaseModel

from ..models.time_slot import LessonType, SlotStatus


class TimeSlotBase(BaseModel):
    instructor_id: int
    date: str
    start_time: str
    end_time: str
    max_capacity: int


class TimeSlotCreate(TimeSlotBase):
    lesson_type: str | None = None
    swim_styles: list[str] | None = None


class TimeSlotUpdate(BaseModel):
    date: str | None = None
    start_time: str | None = None
    end_time: str | None = None
    max_capacity: int | None = None
    lesson_type: str | None = None
    swim_styles: list[str] | None = None


class AvailabilityWindow(BaseModel):
    date: str
    start_time: str
    end_time: str


class SlotGenerateRequest(BaseModel):
    instructor_id: int
    window: AvailabilityWindow
    lesson_type: str = "private"
    swim_styles: list[str] | None = None
    lesson_duration: int | None = None
    gap: int | None = None


class TimeSlot(TimeSlotBase):
    id: int
    lesson_type: LessonType
    swim_styles: list[str]
    current_capacity: int
    status: SlotStatus
    lesson_ids: list[int] = []
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class AvailableTimeSlot(TimeSlot):
    instructor_name: str
    available_seats: int
