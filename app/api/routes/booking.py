import logging
from datetime import datetime
from pathlib import Path

from fastapi import APIRouter, Depends, Form, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.api.deps import get_notification_scheduler, get_now, get_phone_validator, get_settings
from app.api.messages import error_message, success_message
from app.core.config import Settings
from app.core.errors import BookingError
from app.models.booking import BookingForm
from app.services.booking_service import DATE_FORMAT, assemble_booking, book_appointment
from app.services.phone_service import PhoneValidator
from app.services.reminder_service import NotificationScheduler

logger = logging.getLogger(__name__)
router = APIRouter(tags=["booking"])

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent.parent / "templates"))


def _render(request: Request, form: BookingForm, message: str, app_settings: Settings) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "booking.html",
        {"booking": form, "message": message, "site_name": app_settings.site_name},
    )


@router.get("/", response_class=HTMLResponse)
async def booking_page(
    request: Request,
    now: datetime = Depends(get_now),
    app_settings: Settings = Depends(get_settings),
) -> HTMLResponse:
    """Empty form; the date picker starts at today."""
    return _render(request, BookingForm(min_date=now.strftime(DATE_FORMAT)), "", app_settings)


@router.post("/", response_class=HTMLResponse)
async def submit_booking(
    request: Request,
    name: str = Form(""),
    treatment: str = Form(""),
    phone: str = Form(""),
    date: str = Form(""),
    time: str = Form(""),
    now: datetime = Depends(get_now),
    app_settings: Settings = Depends(get_settings),
    phone_validator: PhoneValidator = Depends(get_phone_validator),
    scheduler: NotificationScheduler = Depends(get_notification_scheduler),
) -> HTMLResponse:
    min_date = now.strftime(DATE_FORMAT)
    submitted = BookingForm(
        name=name, treatment=treatment, phone=phone, date=date, time=time, min_date=min_date
    )
    try:
        booking = assemble_booking(
            name=name,
            treatment=treatment,
            phone=phone,
            date_str=date,
            time_str=time,
            zone=app_settings.zone,
            today=now.date(),
        )
        confirmation = await book_appointment(booking, now, app_settings, phone_validator, scheduler)
    except BookingError as e:
        logger.info("Booking not accepted (%s): %s", type(e).__name__, e)
        return _render(request, submitted, error_message(e), app_settings)

    return _render(
        request,
        BookingForm(min_date=min_date),
        success_message(confirmation, app_settings.site_name),
        app_settings,
    )
