from .slot import (
    TimeSlot,
    TimeSlotCreate,
    TimeSlotUpdate,
    AvailableTimeSlot,
    AvailabilityWindow,
    SlotGenerateRequest,
)
from .lesson import Lesson, LessonBook, LessonCancel, LessonStatusUpdate
from .user import (
    Availability,
    Instructor,
    Swimmer,
    SwimmerPreferencesUpdate,
    SwimmingStylesUpdate,
)
from .schedule import (
    InstructorSchedule,
    ScheduleConflict,
    ScheduleEntry,
    ScheduleLesson,
    ScheduleStudent,
    WeeklySchedule,
)
