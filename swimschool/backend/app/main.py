import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from .api.errors import register_exception_handlers
from .api.routes import instructors, lessons, schedule, slots, swimmers
from .db.session import Base, engine
from .config import get_settings


settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(title="SwimSchool Booking API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
register_exception_handlers(app)

app.include_router(slots.router, prefix="/api/v1")
app.include_router(lessons.router, prefix="/api/v1")
app.include_router(instructors.router, prefix="/api/v1")
app.include_router(swimmers.router, prefix="/api/v1")
app.include_router(schedule.router, prefix="/api/v1")


@app.on_event("startup")
async def startup_event() -> None:
    Base.metadata.create_all(bind=engine)
