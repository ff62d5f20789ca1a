"""Booking and cancellation of swimmers against time slots.

A slot owns at most one lesson. The first booking creates it; later bookings
into a group slot add students to the same lesson. Seats are claimed with a
single conditional ``UPDATE`` that only increments ``current_capacity`` while
it is below ``max_capacity``, so concurrent requests can never overbook.
"""

from __future__ import annotations

import logging

from sqlalchemy import case, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..core import validators
from ..core.errors import CapacityError, NotFoundError, SchedulingError, ValidationError
from ..db import models
from ..db.models.lesson import LessonStatus
from ..db.models.time_slot import LessonType, SlotStatus
from .slot_service import derive_status

logger = logging.getLogger(__name__)


def _get_swimmer(db: Session, swimmer_id: int) -> models.User:
    swimmer = db.get(models.User, swimmer_id)
    if swimmer is None or swimmer.role != models.UserRole.swimmer:
        raise ValidationError("Swimmer not found")
    return swimmer


def claim_seat(db: Session, slot_id: int) -> bool:
    """Increment the slot's booked seats if one is free; False when the slot is full."""
    result = db.execute(
        update(models.TimeSlot)
        .where(
            models.TimeSlot.id == slot_id,
            models.TimeSlot.status != SlotStatus.cancelled,
            models.TimeSlot.current_capacity < models.TimeSlot.max_capacity,
        )
        .values(current_capacity=models.TimeSlot.current_capacity + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def release_seat(db: Session, slot_id: int) -> None:
    db.execute(
        update(models.TimeSlot)
        .where(models.TimeSlot.id == slot_id)
        .values(
            current_capacity=case(
                (models.TimeSlot.current_capacity > 0, models.TimeSlot.current_capacity - 1),
                else_=0,
            )
        )
        .execution_options(synchronize_session=False)
    )


def _lesson_for_slot(db: Session, slot_id: int) -> models.Lesson | None:
    return db.execute(
        select(models.Lesson).where(models.Lesson.time_slot_id == slot_id)
    ).scalar_one_or_none()


def book_lesson(
    db: Session,
    swimmer_id: int | str,
    time_slot_id: int | str,
    swim_style: str,
) -> models.Lesson:
    swimmer_id = validators.validate_identifier(swimmer_id, "swimmer ID")
    time_slot_id = validators.validate_identifier(time_slot_id, "time slot ID")
    swim_style = validators.validate_swim_style(swim_style)

    swimmer = _get_swimmer(db, swimmer_id)
    if swim_style not in (swimmer.swimming_styles or []):
        raise ValidationError(f"Swimmer is not trained in {swim_style}")

    slot = db.get(models.TimeSlot, time_slot_id)
    if slot is None:
        raise NotFoundError("Time slot not found")
    if slot.status == SlotStatus.cancelled:
        raise ValidationError("Time slot is cancelled")

    try:
        if not claim_seat(db, slot.id):
            raise CapacityError("Time slot is fully booked")
        db.refresh(slot)
        if swim_style not in (slot.swim_styles or []):
            raise ValidationError(f"{swim_style} is not offered in this time slot")

        lesson = _lesson_for_slot(db, slot.id)
        if lesson is None:
            lesson = models.Lesson(
                time_slot_id=slot.id,
                instructor_id=slot.instructor_id,
                type=LessonType.group if slot.max_capacity > 1 else LessonType.private,
                swim_style=swim_style,
                status=LessonStatus.scheduled,
            )
            db.add(lesson)
        elif swimmer.id in lesson.student_ids:
            raise ValidationError("Swimmer already booked in this lesson")
        lesson.students.append(models.LessonStudent(swimmer_id=swimmer.id, swim_style=swim_style))
        slot.status = derive_status(slot)
        db.commit()
    except SchedulingError as exc:
        db.rollback()
        if isinstance(exc, CapacityError):
            logger.warning(
                "Time slot full",
                extra={"slot_id": time_slot_id, "swimmer_id": swimmer_id},
            )
        raise
    except IntegrityError as exc:
        db.rollback()
        constraint = getattr(getattr(exc.orig, "diag", None), "constraint_name", "")
        if constraint == "uq_lesson_student" or "lesson_students" in str(exc.orig):
            raise ValidationError("Swimmer already booked in this lesson") from exc
        raise
    except Exception:
        db.rollback()
        raise

    db.refresh(lesson)
    logger.info(
        "Booked lesson",
        extra={"lesson_id": lesson.id, "slot_id": slot.id, "swimmer_id": swimmer.id},
    )
    return lesson


def cancel_lesson(db: Session, swimmer_id: int | str, lesson_id: int | str) -> bool:
    swimmer_id = validators.validate_identifier(swimmer_id, "swimmer ID")
    lesson_id = validators.validate_identifier(lesson_id, "lesson ID")

    lesson = db.get(models.Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson not found")
    student = next((item for item in lesson.students if item.swimmer_id == swimmer_id), None)
    if student is None:
        raise ValidationError("Swimmer is not enrolled in this lesson")

    slot_id = lesson.time_slot_id
    try:
        # slot row is locked before lesson rows, same order as book_lesson
        release_seat(db, slot_id)
        lesson.students.remove(student)
        lesson_deleted = not lesson.students
        if lesson_deleted:
            db.delete(lesson)
        db.flush()
        slot = db.get(models.TimeSlot, slot_id)
        if slot is not None:
            db.refresh(slot)
            slot.status = derive_status(slot)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Cancelled lesson",
        extra={
            "lesson_id": lesson_id,
            "slot_id": slot_id,
            "swimmer_id": swimmer_id,
            "lesson_deleted": lesson_deleted,
        },
    )
    return True


__all__ = ["claim_seat", "release_seat", "book_lesson", "cancel_lesson"]
