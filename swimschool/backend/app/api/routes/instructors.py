from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...db.session import get_db
from ...db import schemas
from ...services import instructor_service, schedule_service, slot_generator

router = APIRouter(prefix="/instructors", tags=["instructors"])


@router.get("", response_model=list[schemas.Instructor])
def list_instructors(db: Session = Depends(get_db)):
    return instructor_service.list_instructors(db)


@router.get("/available", response_model=list[schemas.Instructor])
def available_instructors(
    date: str,
    start_time: str,
    end_time: str | None = None,
    swim_style: str | None = None,
    db: Session = Depends(get_db),
):
    return instructor_service.get_available_instructors(
        db, date, start_time, end_time=end_time, swim_style=swim_style
    )


@router.get("/{instructor_id}", response_model=schemas.Instructor)
def get_instructor(instructor_id: int, db: Session = Depends(get_db)):
    return instructor_service.get_instructor(db, instructor_id)


@router.get("/{instructor_id}/availability", response_model=list[schemas.Availability])
def get_availability(instructor_id: int, db: Session = Depends(get_db)):
    return instructor_service.get_availability(db, instructor_id)


@router.put("/{instructor_id}/availability", response_model=list[schemas.Availability])
def set_availability(
    instructor_id: int,
    payload: list[schemas.AvailabilityWindow],
    db: Session = Depends(get_db),
):
    return instructor_service.set_availability(
        db, instructor_id, [window.model_dump() for window in payload]
    )


@router.post("/{instructor_id}/availability")
def add_availability(
    instructor_id: int,
    payload: schemas.AvailabilityWindow,
    generate: bool = False,
    lesson_type: str = "private",
    db: Session = Depends(get_db),
):
    if generate:
        slot_generator.check_generation(db, instructor_id, lesson_type)
    entry = instructor_service.add_availability(db, instructor_id, payload.model_dump())
    created = []
    if generate:
        created = slot_generator.generate_slots(
            db, instructor_id, payload.model_dump(), lesson_type
        )
    return {
        "availability": schemas.Availability.model_validate(entry),
        "generated_slots": [schemas.TimeSlot.model_validate(slot) for slot in created],
    }


@router.delete("/{instructor_id}/availability")
def remove_availability(
    instructor_id: int,
    date: str,
    start_time: str,
    cleanup: bool = False,
    db: Session = Depends(get_db),
):
    window_date, window_start, window_end = instructor_service.remove_availability(
        db, instructor_id, date, start_time
    )
    removed = 0
    if cleanup:
        removed = slot_generator.remove_unbooked_slots(
            db, instructor_id, window_date, window_start, window_end
        )
    return {"status": "deleted", "removed_slots": removed}


@router.put("/{instructor_id}/styles", response_model=schemas.Instructor)
def update_styles(
    instructor_id: int,
    payload: schemas.SwimmingStylesUpdate,
    db: Session = Depends(get_db),
):
    return instructor_service.update_swimming_styles(db, instructor_id, payload.swimming_styles)


@router.get("/{instructor_id}/schedule", response_model=schemas.InstructorSchedule)
def instructor_schedule(instructor_id: int, date: str, db: Session = Depends(get_db)):
    return schedule_service.get_instructor_schedule(db, instructor_id, date)
