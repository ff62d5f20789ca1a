from __future__ import annotations

from collections import defaultdict
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core import validators
from ..core.constants import DAYS_IN_WEEK, UNKNOWN_INSTRUCTOR, UNKNOWN_SWIMMER
from ..core.timeutils import intervals_overlap
from ..db import models, schemas
from ..db.models.time_slot import LessonType, SlotStatus


def _display_names(db: Session, user_ids: set[int]) -> dict[int, str]:
    if not user_ids:
        return {}
    users = db.execute(select(models.User).where(models.User.id.in_(list(user_ids)))).scalars().all()
    return {user.id: user.full_name for user in users}


def _lessons_by_slot(db: Session, slot_ids: list[int]) -> dict[int, models.Lesson]:
    if not slot_ids:
        return {}
    lessons = (
        db.execute(
            select(models.Lesson)
            .options(selectinload(models.Lesson.students))
            .where(models.Lesson.time_slot_id.in_(slot_ids))
        )
        .scalars()
        .all()
    )
    return {lesson.time_slot_id: lesson for lesson in lessons}


def _build_entries(db: Session, slots: list[models.TimeSlot]) -> list[schemas.ScheduleEntry]:
    lessons = _lessons_by_slot(db, [slot.id for slot in slots])
    user_ids = {slot.instructor_id for slot in slots}
    for lesson in lessons.values():
        user_ids.update(student.swimmer_id for student in lesson.students)
    names = _display_names(db, user_ids)

    entries = []
    for slot in slots:
        lesson = lessons.get(slot.id)
        lesson_view = None
        if lesson is not None:
            lesson_view = schemas.ScheduleLesson(
                id=lesson.id,
                type=lesson.type.value,
                swim_style=lesson.swim_style,
                status=lesson.status.value,
                students=[
                    schemas.ScheduleStudent(
                        swimmer_id=student.swimmer_id,
                        name=names.get(student.swimmer_id, UNKNOWN_SWIMMER),
                        swim_style=student.swim_style,
                    )
                    for student in lesson.students
                ],
            )
        entries.append(
            schemas.ScheduleEntry(
                slot_id=slot.id,
                instructor_id=slot.instructor_id,
                instructor_name=names.get(slot.instructor_id, UNKNOWN_INSTRUCTOR),
                date=slot.date,
                start_time=slot.start_time,
                end_time=slot.end_time,
                lesson_type=slot.lesson_type.value,
                swim_styles=list(slot.swim_styles or []),
                max_capacity=slot.max_capacity,
                current_capacity=slot.current_capacity,
                status=slot.status.value,
                lesson=lesson_view,
            )
        )
    return entries


def get_instructor_schedule(
    db: Session, instructor_id: int | str, date: str
) -> schemas.InstructorSchedule:
    instructor_id = validators.validate_identifier(instructor_id, "instructor ID")
    date = validators.validate_date(date).isoformat()
    slots = (
        db.execute(
            select(models.TimeSlot)
            .where(models.TimeSlot.instructor_id == instructor_id)
            .where(models.TimeSlot.date == date)
            .order_by(models.TimeSlot.start_time)
        )
        .scalars()
        .all()
    )
    instructor = db.get(models.User, instructor_id)
    return schemas.InstructorSchedule(
        instructor_id=instructor_id,
        instructor_name=instructor.full_name if instructor else UNKNOWN_INSTRUCTOR,
        date=date,
        entries=_build_entries(db, list(slots)),
    )


def get_available_slots(
    db: Session,
    date: str,
    swim_style: str | None = None,
    lesson_type: str | None = None,
) -> list[models.TimeSlot]:
    date = validators.validate_date(date).isoformat()
    stmt = (
        select(models.TimeSlot)
        .where(models.TimeSlot.date == date)
        .where(models.TimeSlot.status != SlotStatus.cancelled)
        .where(models.TimeSlot.current_capacity < models.TimeSlot.max_capacity)
    )
    if lesson_type:
        stmt = stmt.where(
            models.TimeSlot.lesson_type == LessonType(validators.validate_lesson_type(lesson_type))
        )
    stmt = stmt.order_by(models.TimeSlot.start_time, models.TimeSlot.instructor_id)
    slots = list(db.execute(stmt).scalars().all())
    if swim_style:
        style = validators.validate_swim_style(swim_style)
        slots = [slot for slot in slots if style in (slot.swim_styles or [])]

    names = _display_names(db, {slot.instructor_id for slot in slots})
    for slot in slots:
        setattr(slot, "instructor_name", names.get(slot.instructor_id, UNKNOWN_INSTRUCTOR))
        setattr(slot, "available_seats", max(slot.max_capacity - slot.current_capacity, 0))
    return slots


def _week_dates(week_start: str) -> list[str]:
    start = validators.validate_date(week_start)
    return [(start + timedelta(days=offset)).isoformat() for offset in range(DAYS_IN_WEEK)]


def _week_slots(db: Session, dates: list[str]) -> list[models.TimeSlot]:
    return list(
        db.execute(
            select(models.TimeSlot)
            .where(models.TimeSlot.date.in_(dates))
            .where(models.TimeSlot.status != SlotStatus.cancelled)
            .order_by(models.TimeSlot.date, models.TimeSlot.start_time, models.TimeSlot.instructor_id)
        )
        .scalars()
        .all()
    )


def get_weekly_schedule(db: Session, week_start: str) -> schemas.WeeklySchedule:
    """Group the week's booked and open slots by date, starting at ``week_start``."""
    dates = _week_dates(week_start)
    entries = _build_entries(db, _week_slots(db, dates))
    days: dict[str, list[schemas.ScheduleEntry]] = {day: [] for day in dates}
    for entry in entries:
        days[entry.date].append(entry)
    booked = [entry.lesson for entry in entries if entry.lesson is not None]
    return schemas.WeeklySchedule(
        week_start=dates[0],
        days=days,
        total_lessons=len(booked),
        total_swimmers=sum(len(lesson.students) for lesson in booked),
    )


def check_conflicts(db: Session, week_start: str) -> list[schemas.ScheduleConflict]:
    dates = _week_dates(week_start)
    slots = _week_slots(db, dates)
    conflicts: list[schemas.ScheduleConflict] = []

    grouped: dict[tuple[int, str], list[models.TimeSlot]] = defaultdict(list)
    for slot in slots:
        grouped[(slot.instructor_id, slot.date)].append(slot)
    for (instructor_id, date), day_slots in grouped.items():
        for index, first in enumerate(day_slots):
            for second in day_slots[index + 1:]:
                if intervals_overlap(first.start_time, first.end_time, second.start_time, second.end_time):
                    conflicts.append(
                        schemas.ScheduleConflict(
                            type="instructor_double_booking",
                            instructor_id=instructor_id,
                            date=date,
                            slot_ids=[first.id, second.id],
                        )
                    )

    lessons = _lessons_by_slot(db, [slot.id for slot in slots])
    instructors = {
        user.id: user
        for user in db.execute(
            select(models.User).where(models.User.id.in_(sorted({slot.instructor_id for slot in slots})))
        ).scalars()
    }
    for slot in slots:
        lesson = lessons.get(slot.id)
        instructor = instructors.get(slot.instructor_id)
        if lesson is None or instructor is None:
            continue
        taught = set(instructor.swimming_styles or [])
        for style in sorted({student.swim_style for student in lesson.students} - taught):
            conflicts.append(
                schemas.ScheduleConflict(
                    type="style_incompatibility",
                    instructor_id=slot.instructor_id,
                    date=slot.date,
                    slot_ids=[slot.id],
                    lesson_id=lesson.id,
                    style=style,
                )
            )
    return conflicts


__all__ = [
    "get_instructor_schedule",
    "get_available_slots",
    "get_weekly_schedule",
    "check_conflicts",
]
