from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...db.session import get_db
from ...db import schemas
from ...services import swimmer_service

router = APIRouter(prefix="/swimmers", tags=["swimmers"])


@router.get("/{swimmer_id}", response_model=schemas.Swimmer)
def get_swimmer(swimmer_id: int, db: Session = Depends(get_db)):
    return swimmer_service.get_swimmer(db, swimmer_id)


@router.get("/{swimmer_id}/lessons", response_model=list[schemas.Lesson])
def swimmer_lessons(swimmer_id: int, db: Session = Depends(get_db)):
    return swimmer_service.get_swimmer_lessons(db, swimmer_id)


@router.patch("/{swimmer_id}/preferences", response_model=schemas.Swimmer)
def update_preferences(
    swimmer_id: int,
    payload: schemas.SwimmerPreferencesUpdate,
    db: Session = Depends(get_db),
):
    return swimmer_service.update_preferences(
        db,
        swimmer_id,
        swimming_styles=payload.swimming_styles,
        preferred_lesson_type=payload.preferred_lesson_type,
    )
