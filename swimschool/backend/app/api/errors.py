import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..core.errors import SchedulingError

logger = logging.getLogger(__name__)


async def scheduling_error_handler(request: Request, exc: SchedulingError) -> JSONResponse:
    logger.info(
        "Request rejected",
        extra={
            "error": exc.kind,
            "detail": exc.message,
            "path": request.url.path,
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(SchedulingError, scheduling_error_handler)
