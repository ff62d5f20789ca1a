from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from ...db.session import get_db
from ...db import schemas
from ...services import schedule_service

router = APIRouter(prefix="/schedule", tags=["schedule"])


@router.get("/weekly", response_model=schemas.WeeklySchedule)
def weekly_schedule(week_start: str, db: Session = Depends(get_db)):
    return schedule_service.get_weekly_schedule(db, week_start)


@router.get("/conflicts", response_model=list[schemas.ScheduleConflict])
def schedule_conflicts(week_start: str, db: Session = Depends(get_db)):
    return schedule_service.check_conflicts(db, week_start)
