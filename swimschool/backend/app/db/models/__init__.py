from .user import User, UserRole
from .availability import InstructorAvailability
from .time_slot import TimeSlot, SlotStatus, LessonType
from .lesson import Lesson, LessonStatus, LessonStudent
