import logging
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

from app.core.config import Settings
from app.core.errors import (
    InputMalformedError,
    MessageBirdError,
    PhoneInvalidError,
    SchedulingFailedError,
    TimeRejectedError,
)
from app.core.formatting import format_when
from app.models.booking import BookingConfirmation, BookingRequest, Valid
from app.services.phone_service import PhoneValidator
from app.services.reminder_service import NotificationScheduler
from app.services.time_validation import validate_appointment_time

logger = logging.getLogger(__name__)

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def build_reminder_body(site_name: str, appointment_at: datetime) -> str:
    return (
        f"Gentle reminder: you've got an appointment with {site_name} at "
        f"{format_when(appointment_at)}. See you then!"
    )


def parse_appointment_time(date_str: str, time_str: str, zone: ZoneInfo) -> datetime:
    """Combine the form's date and time into a zoned datetime.

    Raises InputMalformedError for unparsable input or a wall-clock time
    skipped by a DST switch.
    """
    try:
        naive = datetime.strptime(f"{date_str.strip()} {time_str.strip()}", f"{DATE_FORMAT} {TIME_FORMAT}")
    except ValueError as e:
        raise InputMalformedError(f"Cannot parse date/time {date_str!r} {time_str!r}") from e
    zoned = naive.replace(tzinfo=zone)
    if zoned.astimezone(UTC).astimezone(zone).replace(tzinfo=None) != naive:
        raise InputMalformedError(f"{naive} does not exist in {zone.key}")
    return zoned


def assemble_booking(
    *,
    name: str,
    treatment: str,
    phone: str,
    date_str: str,
    time_str: str,
    zone: ZoneInfo,
    today: date,
) -> BookingRequest:
    fields = {"name": name, "treatment": treatment, "phone": phone, "date": date_str, "time": time_str}
    missing = [k for k, v in fields.items() if not v or not v.strip()]
    if missing:
        raise InputMalformedError(f"Missing fields: {', '.join(missing)}")
    return BookingRequest(
        name=name.strip(),
        treatment=treatment.strip(),
        phone=phone.strip(),
        appointment_at=parse_appointment_time(date_str, time_str, zone),
        min_selectable_date=today,
    )


async def book_appointment(
    booking: BookingRequest,
    now: datetime,
    settings: Settings,
    phone_validator: PhoneValidator,
    scheduler: NotificationScheduler,
) -> BookingConfirmation:
    """Validate the booking and schedule its reminder SMS.

    Raises a BookingError subclass for every reason the booking cannot go ahead.
    Nothing is scheduled unless phone and time both pass.
    """
    try:
        phone_ok = await phone_validator.check(booking.phone, settings.phone_region)
    except MessageBirdError as e:
        # Cannot confirm the number, so do not go on
        logger.warning("Phone lookup unavailable for %s: %s", booking.phone, e)
        phone_ok = False
    if not phone_ok:
        raise PhoneInvalidError(booking.phone)

    outcome = validate_appointment_time(
        booking.appointment_at, now, settings.lead_time, settings.business_hours
    )
    if not isinstance(outcome, Valid):
        logger.info("Rejected appointment time %s: %s", booking.appointment_at.isoformat(), outcome.kind)
        raise TimeRejectedError(outcome)

    reminder_at = (booking.appointment_at.astimezone(UTC) - settings.lead_time).astimezone(settings.zone)
    try:
        message = await scheduler.schedule(
            originator=settings.originator,
            destination=booking.phone,
            body=build_reminder_body(settings.site_name, booking.appointment_at),
            send_at=reminder_at,
        )
    except MessageBirdError as e:
        logger.error("Scheduling reminder for %s failed: %s", booking.phone, e.detail)
        raise SchedulingFailedError(e.detail) from e

    logger.info("Reminder %s scheduled for %s at %s", message.id, booking.phone, reminder_at.isoformat())
    return BookingConfirmation(
        appointment_at=booking.appointment_at,
        reminder_at=reminder_at,
        treatment=booking.treatment,
        phone=booking.phone,
        message_id=message.id,
    )
