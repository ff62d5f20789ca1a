from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from ...db.session import get_db
from ...db import schemas
from ...services import schedule_service, slot_generator, slot_service

router = APIRouter(prefix="/slots", tags=["slots"])


@router.get("", response_model=list[schemas.TimeSlot])
def list_slots(
    date: str | None = None,
    instructor_id: int | None = None,
    min_capacity: int | None = None,
    db: Session = Depends(get_db),
):
    return slot_service.list_slots(
        db, date=date, instructor_id=instructor_id, min_capacity=min_capacity
    )


@router.get("/available", response_model=list[schemas.AvailableTimeSlot])
def available_slots(
    date: str,
    swim_style: str | None = None,
    lesson_type: str | None = None,
    db: Session = Depends(get_db),
):
    return schedule_service.get_available_slots(
        db, date, swim_style=swim_style, lesson_type=lesson_type
    )


@router.post("/generate", response_model=list[schemas.TimeSlot])
def generate_slots(payload: schemas.SlotGenerateRequest, db: Session = Depends(get_db)):
    return slot_generator.generate_slots(
        db,
        payload.instructor_id,
        payload.window.model_dump(),
        payload.lesson_type,
        swim_styles=payload.swim_styles,
        lesson_duration=payload.lesson_duration,
        gap=payload.gap,
    )


@router.get("/{slot_id}", response_model=schemas.TimeSlot)
def get_slot(slot_id: int, db: Session = Depends(get_db)):
    slot = slot_service.get_slot(db, slot_id)
    if not slot:
        raise HTTPException(status_code=404, detail="Slot not found")
    return slot


@router.post("", response_model=schemas.TimeSlot)
def create_slot(payload: schemas.TimeSlotCreate, db: Session = Depends(get_db)):
    return slot_service.create_slot(
        db,
        payload.date,
        payload.start_time,
        payload.end_time,
        payload.instructor_id,
        payload.max_capacity,
        lesson_type=payload.lesson_type,
        swim_styles=payload.swim_styles,
    )


@router.patch("/{slot_id}", response_model=schemas.TimeSlot)
def update_slot(
    slot_id: int,
    payload: schemas.TimeSlotUpdate,
    db: Session = Depends(get_db),
):
    slot = slot_service.update_slot(db, slot_id, payload.model_dump(exclude_unset=True))
    if not slot:
        raise HTTPException(status_code=404, detail="Slot not found")
    return slot


@router.post("/{slot_id}/cancel", response_model=schemas.TimeSlot)
def cancel_slot(slot_id: int, db: Session = Depends(get_db)):
    return slot_service.cancel_slot(db, slot_id)


@router.delete("/{slot_id}")
def delete_slot(slot_id: int, db: Session = Depends(get_db)):
    if not slot_service.delete_slot(db, slot_id):
        raise HTTPException(status_code=404, detail="Slot not found")
    return {"status": "deleted"}
