import logging
import os
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from app.api.routes import booking
from app.core.config import settings, _ENV_FILE
from app.services.messagebird_client import MessageBirdClient

if os.getenv("ENV", settings.env) != "production":
    logging.basicConfig(level=logging.DEBUG)
else:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time": "%(asctime)s", "level": "%(levelname)s", "message": "%(message)s"}',
    )
logger = logging.getLogger(__name__)


def _startup_log() -> None:
    logger.info("Loading .env from: %s (exists: %s)", _ENV_FILE, _ENV_FILE.exists())
    logger.info(
        "Bookings in %s between %s and %s, lead time %s",
        settings.timezone,
        settings.opens_at.strftime("%H:%M"),
        settings.closes_at.strftime("%H:%M"),
        settings.lead_time,
    )
    if not settings.messagebird_enabled:
        logger.warning(
            "MessageBird: NOT configured. Set MESSAGEBIRD_ACCESS_KEY in %s; phone lookups will fail",
            _ENV_FILE,
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    _startup_log()
    app.state.messagebird = MessageBirdClient(
        access_key=settings.messagebird_access_key,
        base_url=settings.messagebird_base_url,
        timeout_seconds=settings.messagebird_timeout_seconds,
    )
    yield
    await app.state.messagebird.aclose()


app = FastAPI(
    title=f"{settings.site_name} Booking",
    description="Appointment booking form with SMS reminders",
    version="0.1.0",
    docs_url=None,
    redoc_url=None,
    lifespan=lifespan,
)

app.include_router(booking.router)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    if isinstance(exc, HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": f"{type(exc).__name__}: {str(exc)}"},
    )


@app.get("/health")
async def health() -> dict:
    return {"status": "ok"}


if __name__ == "__main__":
    logger.info("Serving application on :%d", settings.port)
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
