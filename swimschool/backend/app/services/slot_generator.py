"""Turns instructor availability windows into bookable time slots.

Generation walks the window in fixed strides of ``duration + gap`` minutes
starting at the window start, keeping each candidate ``[t, t + duration)``
that ends no later than the window end. Candidates colliding with an
existing slot are skipped, so calling the generator again for the same
window creates nothing new.
"""

from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..config import get_settings
from ..core import validators
from ..core.constants import PRIVATE_LESSON_CAPACITY
from ..core.errors import ValidationError
from ..core.timeutils import minutes_to_time, time_to_minutes
from ..db import models
from ..db.models.time_slot import LessonType, SlotStatus
from .slot_service import find_overlapping, get_instructor

logger = logging.getLogger(__name__)


def slot_defaults(lesson_type: LessonType) -> tuple[int, int, int]:
    """Return ``(duration, gap, max_capacity)`` configured for a lesson type."""
    settings = get_settings()
    if lesson_type == LessonType.group:
        return (
            settings.group_lesson_duration,
            settings.group_lesson_gap,
            settings.group_lesson_capacity,
        )
    return settings.private_lesson_duration, settings.private_lesson_gap, PRIVATE_LESSON_CAPACITY


def candidate_intervals(start_time: str, end_time: str, duration: int, gap: int) -> list[tuple[str, str]]:
    start = time_to_minutes(start_time)
    end = time_to_minutes(end_time)
    intervals = []
    t = start
    while t + duration <= end:
        intervals.append((minutes_to_time(t), minutes_to_time(t + duration)))
        t += duration + gap
    return intervals


def _offered_styles(instructor: models.User, requested: list[str] | None) -> list[str]:
    taught = list(instructor.swimming_styles or [])
    if requested is None:
        if not taught:
            raise ValidationError("Instructor does not teach any swimming style")
        return taught
    styles = validators.validate_swim_styles(requested)
    offered = [style for style in styles if style in taught]
    if not offered:
        raise ValidationError("Instructor does not teach any of the requested swimming styles")
    return offered


def check_generation(db: Session, instructor_id: int | str, lesson_type: str) -> None:
    """Raise the errors `generate_slots` would raise before any window is stored."""
    validators.validate_lesson_type(lesson_type)
    _offered_styles(get_instructor(db, instructor_id), None)


def generate_slots(
    db: Session,
    instructor_id: int | str,
    window: dict,
    lesson_type: str,
    swim_styles: list[str] | None = None,
    lesson_duration: int | None = None,
    gap: int | None = None,
) -> list[models.TimeSlot]:
    date = validators.validate_date(window.get("date")).isoformat()
    start_time = window.get("start_time")
    end_time = window.get("end_time")
    validators.validate_time_range(start_time, end_time)
    resolved_type = LessonType(validators.validate_lesson_type(lesson_type))

    default_duration, default_gap, max_capacity = slot_defaults(resolved_type)
    duration = validators.validate_positive(
        default_duration if lesson_duration is None else lesson_duration, "Lesson duration"
    )
    gap = validators.validate_non_negative(default_gap if gap is None else gap, "Gap")

    instructor = get_instructor(db, instructor_id)
    styles = _offered_styles(instructor, swim_styles)

    created: list[models.TimeSlot] = []
    skipped = 0
    for slot_start, slot_end in candidate_intervals(start_time, end_time, duration, gap):
        if find_overlapping(db, instructor.id, date, slot_start, slot_end):
            skipped += 1
            continue
        slot = models.TimeSlot(
            instructor_id=instructor.id,
            date=date,
            start_time=slot_start,
            end_time=slot_end,
            lesson_type=resolved_type,
            swim_styles=list(styles),
            max_capacity=max_capacity,
            current_capacity=0,
            status=SlotStatus.available,
        )
        db.add(slot)
        # flushed so later candidates see it in the overlap check
        db.flush()
        created.append(slot)

    db.commit()
    for slot in created:
        db.refresh(slot)
    logger.info(
        "Generated time slots",
        extra={
            "instructor_id": instructor.id,
            "date": date,
            "created_count": len(created),
            "skipped_count": skipped,
        },
    )
    return created


def generate_slots_for_availability(
    db: Session,
    instructor_id: int | str,
    date: str | None = None,
    lesson_type: str = "private",
) -> list[models.TimeSlot]:
    """Run the generator over every stored availability window of the instructor."""
    instructor = get_instructor(db, instructor_id)
    windows = sorted(instructor.availability, key=lambda item: (item.date, item.start_time))
    if date:
        date = validators.validate_date(date).isoformat()
        windows = [window for window in windows if window.date == date]
    created: list[models.TimeSlot] = []
    for window in windows:
        created.extend(
            generate_slots(
                db,
                instructor.id,
                {"date": window.date, "start_time": window.start_time, "end_time": window.end_time},
                lesson_type,
            )
        )
    return created


def remove_unbooked_slots(
    db: Session,
    instructor_id: int | str,
    date: str,
    start_time: str,
    end_time: str,
) -> int:
    """Delete lesson-free slots lying inside ``[start_time, end_time)``; booked ones stay."""
    instructor_id = validators.validate_identifier(instructor_id, "instructor ID")
    date = validators.validate_date(date).isoformat()
    validators.validate_time_range(start_time, end_time)
    slots = db.execute(
        select(models.TimeSlot).where(
            models.TimeSlot.instructor_id == instructor_id,
            models.TimeSlot.date == date,
            models.TimeSlot.start_time >= start_time,
            models.TimeSlot.end_time <= end_time,
        )
    ).scalars().all()
    removed = 0
    for slot in slots:
        if slot.lessons:
            continue
        db.delete(slot)
        removed += 1
    db.commit()
    logger.info(
        "Removed unbooked time slots",
        extra={"instructor_id": instructor_id, "date": date, "removed": removed},
    )
    return removed


__all__ = [
    "slot_defaults",
    "candidate_intervals",
    "check_generation",
    "generate_slots",
    "generate_slots_for_availability",
    "remove_unbooked_slots",
]
