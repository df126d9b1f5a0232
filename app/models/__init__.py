from app.models.booking import (
    AfterClosing,
    BeforeNow,
    BeforeOpening,
    BookingConfirmation,
    BookingForm,
    BookingRequest,
    BusinessHours,
    TooSoon,
    Valid,
    ValidationOutcome,
)
from app.models.message import ScheduledMessage

__all__ = [
    "AfterClosing",
    "BeforeNow",
    "BeforeOpening",
    "BookingConfirmation",
    "BookingForm",
    "BookingRequest",
    "BusinessHours",
    "ScheduledMessage",
    "TooSoon",
    "Valid",
    "ValidationOutcome",
]
