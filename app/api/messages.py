"""User-facing status lines for every booking outcome."""

from datetime import timedelta

from app.core.errors import (
    BookingError,
    PhoneInvalidError,
    SchedulingFailedError,
    TimeRejectedError,
)
from app.core.formatting import format_clock, format_when
from app.models.booking import (
    AfterClosing,
    BeforeNow,
    BeforeOpening,
    BookingConfirmation,
    TooSoon,
    ValidationOutcome,
)

RETRY_PROMPT = "Please check your details and try again!"


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def _lead_time_text(lead_time: timedelta) -> str:
    total_minutes = int(lead_time.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if minutes == 0:
        return _plural(hours, "hour")
    if hours == 0:
        return _plural(minutes, "minute")
    return f"{_plural(hours, 'hour')} and {_plural(minutes, 'minute')}"


def outcome_message(outcome: ValidationOutcome) -> str:
    if isinstance(outcome, BeforeNow):
        return "Cannot make a booking before now. Please try again!"
    if isinstance(outcome, BeforeOpening):
        return (
            "We're not open yet! Please book your appointment between "
            f"{format_clock(outcome.opening_at)} and {format_clock(outcome.closing_at)}."
        )
    if isinstance(outcome, AfterClosing):
        return (
            "We're closed! Please book your appointment between "
            f"{format_clock(outcome.opening_at)} and {format_clock(outcome.closing_at)}."
        )
    if isinstance(outcome, TooSoon):
        return f"Please book an appointment {_lead_time_text(outcome.lead_time)} in advance."
    return ""


def error_message(exc: BookingError) -> str:
    if isinstance(exc, PhoneInvalidError):
        return "Please enter a valid phone number."
    if isinstance(exc, TimeRejectedError):
        return outcome_message(exc.outcome)
    if isinstance(exc, SchedulingFailedError):
        return f"{exc.detail}. {RETRY_PROMPT}"
    return RETRY_PROMPT


def success_message(confirmation: BookingConfirmation, site_name: str) -> str:
    return (
        f"Done! We've set up an appointment for you at {format_when(confirmation.appointment_at)} "
        f"for {confirmation.treatment}. We'll send a reminder to {confirmation.phone} at "
        f"{format_when(confirmation.reminder_at)}. Thanks for using {site_name}!"
    )
