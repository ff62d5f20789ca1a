from pydantic import BaseModel


class ScheduleStudent(BaseModel):
    swimmer_id: int
    name: str
    swim_style: str


class ScheduleLesson(BaseModel):
    id: int
    type: str
    swim_style: str
    status: str
    students: list[ScheduleStudent]


class ScheduleEntry(BaseModel):
    slot_id: int
    instructor_id: int
    instructor_name: str
    date: str
    start_time: str
    end_time: str
    lesson_type: str
    swim_styles: list[str]
    max_capacity: int
    current_capacity: int
    status: str
    lesson: ScheduleLesson | None = None


class InstructorSchedule(BaseModel):
    instructor_id: int
    instructor_name: str
    date: str
    entries: list[ScheduleEntry]


class WeeklySchedule(BaseModel):
    week_start: str
    days: dict[str, list[ScheduleEntry]]
    total_lessons: int
    total_swimmers: int


class ScheduleConflict(BaseModel):
    type: str
    instructor_id: int
    date: str
    slot_ids: list[int] = []
    lesson_id: int | None = None
    style: str | None = None
