from . import (
    instructors,
    lessons,
    schedule,
    slots,
    swimmers,
)

__all__ = [
    "instructors",
    "lessons",
    "schedule",
    "slots",
    "swimmers",
]
