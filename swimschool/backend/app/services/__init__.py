from . import (
    booking_service,
    instructor_service,
    lesson_service,
    schedule_service,
    slot_generator,
    slot_service,
    swimmer_service,
)
__all__ = [
    "booking_service",
    "instructor_service",
    "lesson_service",
    "schedule_service",
    "slot_generator",
    "slot_service",
    "swimmer_service",
]
