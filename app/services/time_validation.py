from datetime import datetime, timedelta, timezone

from app.models.booking import (
    AfterClosing,
    BeforeNow,
    BeforeOpening,
    BusinessHours,
    TooSoon,
    Valid,
    ValidationOutcome,
)


def validate_appointment_time(
    appointment_at: datetime,
    now: datetime,
    lead_time: timedelta,
    business_hours: BusinessHours,
) -> ValidationOutcome:
    """Decide whether appointment_at can be booked.

    Checks run in a fixed order and the first failing one wins: past, before
    opening, after closing, inside the lead time. Opening/closing bounds and
    the lead time itself are inclusive. `now` must be in the same zone.
    """
    tz = appointment_at.tzinfo
    day = appointment_at.date()
    opening_at = datetime.combine(day, business_hours.opens_at, tzinfo=tz)
    closing_at = datetime.combine(day, business_hours.closes_at, tzinfo=tz)

    if appointment_at < now:
        return BeforeNow()
    if appointment_at < opening_at:
        return BeforeOpening(opening_at=opening_at, closing_at=closing_at)
    if appointment_at > closing_at:
        return AfterClosing(opening_at=opening_at, closing_at=closing_at)
    # Elapsed time, not wall-clock difference, across a DST switch
    if appointment_at.astimezone(timezone.utc) - now.astimezone(timezone.utc) < lead_time:
        return TooSoon(lead_time=lead_time)
    return Valid()
