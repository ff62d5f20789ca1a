from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core import validators
from ..core.errors import NotFoundError, ValidationError
from ..db import models
from ..db.models.lesson import LessonStatus
from ..db.models.time_slot import LessonType

logger = logging.getLogger(__name__)


def get_lesson(db: Session, lesson_id: int | str) -> models.Lesson:
    lesson_id = validators.validate_identifier(lesson_id, "lesson ID")
    lesson = db.get(models.Lesson, lesson_id)
    if lesson is None:
        raise NotFoundError("Lesson not found")
    return lesson


def list_lessons(
    db: Session,
    status: str | None = None,
    swim_style: str | None = None,
    instructor_id: int | str | None = None,
    swimmer_id: int | str | None = None,
    lesson_type: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
) -> list[models.Lesson]:
    stmt = (
        select(models.Lesson)
        .join(models.TimeSlot, models.Lesson.time_slot_id == models.TimeSlot.id)
        .options(selectinload(models.Lesson.students))
    )
    if status:
        try:
            stmt = stmt.where(models.Lesson.status == LessonStatus(status))
        except ValueError as exc:
            raise ValidationError(f"Invalid lesson status: {status}") from exc
    if swim_style:
        stmt = stmt.where(models.Lesson.swim_style == validators.validate_swim_style(swim_style))
    if instructor_id is not None:
        stmt = stmt.where(
            models.Lesson.instructor_id == validators.validate_identifier(instructor_id, "instructor ID")
        )
    if swimmer_id is not None:
        swimmer_id = validators.validate_identifier(swimmer_id, "swimmer ID")
        stmt = stmt.where(
            models.Lesson.students.any(models.LessonStudent.swimmer_id == swimmer_id)
        )
    if lesson_type:
        stmt = stmt.where(models.Lesson.type == LessonType(validators.validate_lesson_type(lesson_type)))
    if from_date:
        stmt = stmt.where(models.TimeSlot.date >= validators.validate_date(from_date).isoformat())
    if to_date:
        stmt = stmt.where(models.TimeSlot.date <= validators.validate_date(to_date).isoformat())
    stmt = stmt.order_by(models.TimeSlot.date, models.TimeSlot.start_time)
    return list(db.execute(stmt).scalars().all())


def update_lesson_status(db: Session, lesson_id: int | str, status: str) -> models.Lesson:
    lesson = get_lesson(db, lesson_id)
    try:
        lesson.status = LessonStatus(status)
    except ValueError as exc:
        raise ValidationError(f"Invalid lesson status: {status}") from exc
    db.commit()
    db.refresh(lesson)
    logger.info("Updated lesson status", extra={"lesson_id": lesson.id, "status": status})
    return lesson


__all__ = ["get_lesson", "list_lessons", "update_lesson_status"]
