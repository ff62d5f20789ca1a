from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...db.session import get_db
from ...db import schemas
from ...services import booking_service, lesson_service

router = APIRouter(prefix="/lessons", tags=["lessons"])


@router.get("", response_model=list[schemas.Lesson])
def list_lessons(
    status: str | None = None,
    swim_style: str | None = None,
    instructor_id: int | None = None,
    swimmer_id: int | None = None,
    lesson_type: str | None = None,
    from_date: str | None = None,
    to_date: str | None = None,
    db: Session = Depends(get_db),
):
    return lesson_service.list_lessons(
        db,
        status=status,
        swim_style=swim_style,
        instructor_id=instructor_id,
        swimmer_id=swimmer_id,
        lesson_type=lesson_type,
        from_date=from_date,
        to_date=to_date,
    )


@router.post("", response_model=schemas.Lesson)
def book_lesson(payload: schemas.LessonBook, db: Session = Depends(get_db)):
    return booking_service.book_lesson(
        db, payload.swimmer_id, payload.time_slot_id, payload.swim_style
    )


@router.get("/{lesson_id}", response_model=schemas.Lesson)
def get_lesson(lesson_id: int, db: Session = Depends(get_db)):
    return lesson_service.get_lesson(db, lesson_id)


@router.post("/{lesson_id}/cancel")
def cancel_lesson(
    lesson_id: int,
    payload: schemas.LessonCancel,
    db: Session = Depends(get_db),
):
    booking_service.cancel_lesson(db, payload.swimmer_id, lesson_id)
    return {"status": "canceled"}


@router.patch("/{lesson_id}/status", response_model=schemas.Lesson)
def update_lesson_status(
    lesson_id: int,
    payload: schemas.LessonStatusUpdate,
    db: Session = Depends(get_db),
):
    return lesson_service.update_lesson_status(db, lesson_id, payload.status)
