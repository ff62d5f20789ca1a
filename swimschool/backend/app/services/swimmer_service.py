from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from ..core import validators
from ..core.errors import NotFoundError, ValidationError
from ..db import models


def get_swimmer(db: Session, swimmer_id: int | str) -> models.User:
    swimmer_id = validators.validate_identifier(swimmer_id, "swimmer ID")
    swimmer = db.get(models.User, swimmer_id)
    if swimmer is None or swimmer.role != models.UserRole.swimmer:
        raise NotFoundError("Swimmer not found")
    return swimmer


def get_swimmer_lessons(db: Session, swimmer_id: int | str) -> list[models.Lesson]:
    swimmer = get_swimmer(db, swimmer_id)
    return list(
        db.execute(
            select(models.Lesson)
            .join(models.LessonStudent)
            .options(selectinload(models.Lesson.students), selectinload(models.Lesson.time_slot))
            .where(models.LessonStudent.swimmer_id == swimmer.id)
            .order_by(models.Lesson.created_at.desc(), models.Lesson.id.desc())
        )
        .scalars()
        .all()
    )


def update_preferences(
    db: Session,
    swimmer_id: int | str,
    swimming_styles: list[str] | None = None,
    preferred_lesson_type: str | None = None,
) -> models.User:
    swimmer = get_swimmer(db, swimmer_id)
    if swimming_styles is None and preferred_lesson_type is None:
        raise ValidationError("Nothing to update")
    if swimming_styles is not None:
        swimmer.swimming_styles = validators.validate_swim_styles(swimming_styles, allow_empty=True)
    if preferred_lesson_type is not None:
        swimmer.preferred_lesson_type = validators.validate_lesson_preference(preferred_lesson_type)
    db.commit()
    db.refresh(swimmer)
    return swimmer


__all__ = ["get_swimmer", "get_swimmer_lessons", "update_preferences"]
