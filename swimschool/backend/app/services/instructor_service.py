from __future__ import annotations

import logging
from typing import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core import validators
from ..core.errors import ConflictError, NotFoundError
from ..core.timeutils import intervals_overlap
from ..db import models
from .slot_service import get_instructor

logger = logging.getLogger(__name__)


def _validated_window(window: dict) -> tuple[str, str, str]:
    date = validators.validate_date(window.get("date")).isoformat()
    start_time = window.get("start_time")
    end_time = window.get("end_time")
    validators.validate_time_range(start_time, end_time)
    return date, start_time, end_time


def _ensure_disjoint(windows: Iterable[tuple[str, str, str]]) -> None:
    seen: list[tuple[str, str, str]] = []
    for date, start_time, end_time in windows:
        for other_date, other_start, other_end in seen:
            if date == other_date and intervals_overlap(start_time, end_time, other_start, other_end):
                raise ConflictError(f"Availability windows overlap on {date}")
        seen.append((date, start_time, end_time))


def list_instructors(db: Session) -> list[models.User]:
    return list(
        db.execute(
            select(models.User)
            .where(models.User.role == models.UserRole.instructor)
            .order_by(models.User.last_name, models.User.first_name)
        )
        .scalars()
        .all()
    )


def get_availability(db: Session, instructor_id: int | str) -> list[models.InstructorAvailability]:
    instructor = get_instructor(db, instructor_id)
    return sorted(instructor.availability, key=lambda item: (item.date, item.start_time))


def set_availability(
    db: Session, instructor_id: int | str, windows: list[dict]
) -> list[models.InstructorAvailability]:
    """Replace every availability window of the instructor.

    Slots already generated from the previous windows are left alone; callers
    decide whether to clean them up or regenerate.
    """
    instructor = get_instructor(db, instructor_id)
    validated = [_validated_window(window) for window in windows]
    _ensure_disjoint(validated)
    instructor.availability.clear()
    db.flush()
    for date, start_time, end_time in validated:
        instructor.availability.append(
            models.InstructorAvailability(date=date, start_time=start_time, end_time=end_time)
        )
    db.commit()
    db.refresh(instructor)
    logger.info(
        "Replaced instructor availability",
        extra={"instructor_id": instructor.id, "windows": len(validated)},
    )
    return get_availability(db, instructor.id)


def add_availability(
    db: Session, instructor_id: int | str, window: dict
) -> models.InstructorAvailability:
    instructor = get_instructor(db, instructor_id)
    date, start_time, end_time = _validated_window(window)
    existing = [(item.date, item.start_time, item.end_time) for item in instructor.availability]
    _ensure_disjoint(existing + [(date, start_time, end_time)])
    entry = models.InstructorAvailability(date=date, start_time=start_time, end_time=end_time)
    instructor.availability.append(entry)
    db.commit()
    db.refresh(entry)
    logger.info(
        "Added instructor availability",
        extra={"instructor_id": instructor.id, "date": date},
    )
    return entry


def remove_availability(
    db: Session, instructor_id: int | str, date: str, start_time: str
) -> tuple[str, str, str]:
    """Delete one window and return its ``(date, start_time, end_time)``."""
    instructor = get_instructor(db, instructor_id)
    date = validators.validate_date(date).isoformat()
    validators.validate_time(start_time)
    entry = next(
        (
            item
            for item in instructor.availability
            if item.date == date and item.start_time == start_time
        ),
        None,
    )
    if entry is None:
        raise NotFoundError("Availability window not found")
    removed = (entry.date, entry.start_time, entry.end_time)
    instructor.availability.remove(entry)
    db.commit()
    logger.info(
        "Removed instructor availability",
        extra={"instructor_id": instructor.id, "date": date},
    )
    return removed


def update_swimming_styles(db: Session, instructor_id: int | str, styles: list[str]) -> models.User:
    instructor = get_instructor(db, instructor_id)
    instructor.swimming_styles = validators.validate_swim_styles(styles)
    db.commit()
    db.refresh(instructor)
    return instructor


def get_available_instructors(
    db: Session,
    date: str,
    start_time: str,
    end_time: str | None = None,
    swim_style: str | None = None,
) -> list[models.User]:
    """Instructors whose availability on ``date`` covers the requested time range."""
    date = validators.validate_date(date).isoformat()
    if end_time:
        validators.validate_time_range(start_time, end_time)
    else:
        validators.validate_time(start_time)
    style = validators.validate_swim_style(swim_style) if swim_style else None

    windows = (
        db.execute(
            select(models.InstructorAvailability)
            .options(selectinload(models.InstructorAvailability.instructor))
            .where(models.InstructorAvailability.date == date)
            .where(models.InstructorAvailability.start_time <= start_time)
            .where(models.InstructorAvailability.end_time >= (end_time or start_time))
        )
        .scalars()
        .all()
    )
    result: dict[int, models.User] = {}
    for window in windows:
        instructor = window.instructor
        if instructor is None or instructor.role != models.UserRole.instructor:
            continue
        if style and style not in (instructor.swimming_styles or []):
            continue
        result[instructor.id] = instructor
    return sorted(result.values(), key=lambda user: (user.last_name, user.first_name))


__all__ = [
    "list_instructors",
    "get_instructor",
    "get_availability",
    "set_availability",
    "add_availability",
    "remove_availability",
    "update_swimming_styles",
    "get_available_instructors",
]
