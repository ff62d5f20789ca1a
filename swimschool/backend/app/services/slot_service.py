from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from ..core import validators
from ..core.constants import DEFAULT_SWIM_STYLE, PRIVATE_LESSON_CAPACITY
from ..core.errors import ConflictError, NotFoundError, ValidationError
from ..db import models
from ..db.models.time_slot import LessonType, SlotStatus

logger = logging.getLogger(__name__)

_UPDATABLE_FIELDS = {"date", "start_time", "end_time", "max_capacity", "lesson_type", "swim_styles"}


def find_overlapping(
    db: Session,
    instructor_id: int,
    date: str,
    start_time: str,
    end_time: str,
    exclude_slot_id: int | None = None,
) -> list[models.TimeSlot]:
    """Return non-cancelled slots of the instructor on ``date`` intersecting ``[start, end)``."""
    stmt = select(models.TimeSlot).where(
        models.TimeSlot.instructor_id == instructor_id,
        models.TimeSlot.date == date,
        models.TimeSlot.status != SlotStatus.cancelled,
        models.TimeSlot.start_time < end_time,
        models.TimeSlot.end_time > start_time,
    )
    if exclude_slot_id is not None:
        stmt = stmt.where(models.TimeSlot.id != exclude_slot_id)
    return list(db.execute(stmt.order_by(models.TimeSlot.start_time)).scalars().all())


def get_instructor(db: Session, instructor_id: int | str) -> models.User:
    instructor_id = validators.validate_identifier(instructor_id, "instructor ID")
    instructor = db.get(models.User, instructor_id)
    if instructor is None or instructor.role != models.UserRole.instructor:
        raise NotFoundError("Instructor not found")
    return instructor


def derive_status(slot: models.TimeSlot) -> SlotStatus:
    if slot.status == SlotStatus.cancelled:
        return SlotStatus.cancelled
    return SlotStatus.booked if slot.is_full else SlotStatus.available


def _resolve_lesson_type(lesson_type: str | None, max_capacity: int) -> LessonType:
    if lesson_type is None:
        return LessonType.group if max_capacity > PRIVATE_LESSON_CAPACITY else LessonType.private
    resolved = LessonType(validators.validate_lesson_type(lesson_type))
    if resolved == LessonType.private and max_capacity != PRIVATE_LESSON_CAPACITY:
        raise ValidationError("Private slots must have a maximum capacity of 1")
    return resolved


def create_slot(
    db: Session,
    date: str,
    start_time: str,
    end_time: str,
    instructor_id: int | str,
    max_capacity: int,
    lesson_type: str | None = None,
    swim_styles: list[str] | None = None,
) -> models.TimeSlot:
    date = validators.validate_date(date).isoformat()
    validators.validate_time_range(start_time, end_time)
    validators.validate_positive(max_capacity, "Maximum capacity")
    instructor = get_instructor(db, instructor_id)
    resolved_type = _resolve_lesson_type(lesson_type, max_capacity)
    if swim_styles is not None:
        styles = validators.validate_swim_styles(swim_styles)
    else:
        styles = list(instructor.swimming_styles or []) or [DEFAULT_SWIM_STYLE]

    if find_overlapping(db, instructor.id, date, start_time, end_time):
        raise ConflictError("Time slot overlaps with an existing slot")

    slot = models.TimeSlot(
        instructor_id=instructor.id,
        date=date,
        start_time=start_time,
        end_time=end_time,
        lesson_type=resolved_type,
        swim_styles=styles,
        max_capacity=max_capacity,
        current_capacity=0,
        status=SlotStatus.available,
    )
    db.add(slot)
    db.commit()
    db.refresh(slot)
    logger.info(
        "Created time slot",
        extra={"slot_id": slot.id, "instructor_id": instructor.id, "date": date},
    )
    return slot


def get_slot(db: Session, slot_id: int | str) -> models.TimeSlot | None:
    slot_id = validators.validate_identifier(slot_id, "time slot ID")
    return db.get(models.TimeSlot, slot_id)


def list_slots(
    db: Session,
    date: str | None = None,
    instructor_id: int | str | None = None,
    min_capacity: int | None = None,
) -> list[models.TimeSlot]:
    stmt = select(models.TimeSlot)
    if date:
        stmt = stmt.where(models.TimeSlot.date == validators.validate_date(date).isoformat())
    if instructor_id is not None:
        instructor_id = validators.validate_identifier(instructor_id, "instructor ID")
        stmt = stmt.where(models.TimeSlot.instructor_id == instructor_id)
    if min_capacity:
        stmt = stmt.where(models.TimeSlot.max_capacity >= min_capacity)
    stmt = stmt.order_by(models.TimeSlot.date, models.TimeSlot.start_time)
    return list(db.execute(stmt).scalars().all())


def update_slot(db: Session, slot_id: int | str, updates: dict[str, Any]) -> models.TimeSlot | None:
    slot = get_slot(db, slot_id)
    if slot is None:
        return None
    unknown = set(updates) - _UPDATABLE_FIELDS
    if unknown:
        raise ValidationError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

    date = slot.date
    if updates.get("date") is not None:
        date = validators.validate_date(updates["date"]).isoformat()
    start_time = updates.get("start_time") or slot.start_time
    end_time = updates.get("end_time") or slot.end_time
    validators.validate_time_range(start_time, end_time)

    max_capacity = slot.max_capacity
    if updates.get("max_capacity") is not None:
        max_capacity = validators.validate_positive(updates["max_capacity"], "Maximum capacity")
        if max_capacity < slot.current_capacity:
            raise ValidationError("Cannot reduce capacity below current bookings")

    lesson_type = updates.get("lesson_type")
    if lesson_type is None and updates.get("max_capacity") is not None:
        lesson_type = slot.lesson_type.value
    resolved_type = (
        _resolve_lesson_type(lesson_type, max_capacity) if lesson_type else slot.lesson_type
    )

    swim_styles = slot.swim_styles
    if updates.get("swim_styles") is not None:
        swim_styles = validators.validate_swim_styles(updates["swim_styles"])

    if (date, start_time, end_time) != (slot.date, slot.start_time, slot.end_time):
        if slot.status != SlotStatus.cancelled and find_overlapping(
            db, slot.instructor_id, date, start_time, end_time, exclude_slot_id=slot.id
        ):
            raise ConflictError("Updated time slot would overlap with an existing slot")

    slot.date = date
    slot.start_time = start_time
    slot.end_time = end_time
    slot.max_capacity = max_capacity
    slot.lesson_type = resolved_type
    slot.swim_styles = list(swim_styles)
    slot.status = derive_status(slot)
    db.commit()
    db.refresh(slot)
    logger.info("Updated time slot", extra={"slot_id": slot.id})
    return slot


def delete_slot(db: Session, slot_id: int | str) -> bool:
    slot = get_slot(db, slot_id)
    if slot is None:
        return False
    if slot.lessons:
        raise ConflictError("Cannot delete time slot with active lessons")
    deleted_id = slot.id
    db.delete(slot)
    db.commit()
    logger.info("Deleted time slot", extra={"slot_id": deleted_id})
    return True


def cancel_slot(db: Session, slot_id: int | str) -> models.TimeSlot:
    slot = get_slot(db, slot_id)
    if slot is None:
        raise NotFoundError("Time slot not found")
    if slot.status == SlotStatus.cancelled:
        return slot

    released = 0
    for lesson in list(slot.lessons):
        released += len(lesson.students)
        db.delete(lesson)
    slot.current_capacity = 0
    slot.status = SlotStatus.cancelled
    db.commit()
    db.refresh(slot)
    logger.info(
        "Cancelled time slot",
        extra={"slot_id": slot.id, "released_students": released},
    )
    return slot


__all__ = [
    "find_overlapping",
    "get_instructor",
    "derive_status",
    "create_slot",
    "get_slot",
    "list_slots",
    "update_slot",
    "delete_slot",
    "cancel_slot",
]
