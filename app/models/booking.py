from datetime import date, datetime, time, timedelta
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class BusinessHours(BaseModel):
    """Daily window in which appointments may start (both bounds inclusive)."""

    model_config = ConfigDict(frozen=True)

    opens_at: time
    closes_at: time


class BookingRequest(BaseModel):
    """One submitted booking, built per request and never stored."""

    name: str
    treatment: str
    phone: str
    appointment_at: datetime  # zoned, minute precision
    min_selectable_date: date


class BookingConfirmation(BaseModel):
    appointment_at: datetime
    reminder_at: datetime
    treatment: str
    phone: str
    message_id: str


class BookingForm(BaseModel):
    """Raw form values handed back to the template."""

    name: str = ""
    treatment: str = ""
    phone: str = ""
    date: str = ""
    time: str = ""
    min_date: str = ""


# Time validation outcomes


class _Outcome(BaseModel):
    model_config = ConfigDict(frozen=True)


class Valid(_Outcome):
    kind: Literal["valid"] = "valid"


class BeforeNow(_Outcome):
    kind: Literal["before_now"] = "before_now"


class BeforeOpening(_Outcome):
    kind: Literal["before_opening"] = "before_opening"
    opening_at: datetime
    closing_at: datetime


class AfterClosing(_Outcome):
    kind: Literal["after_closing"] = "after_closing"
    opening_at: datetime
    closing_at: datetime


class TooSoon(_Outcome):
    kind: Literal["too_soon"] = "too_soon"
    lead_time: timedelta


ValidationOutcome = Annotated[
    Union[Valid, BeforeNow, BeforeOpening, AfterClosing, TooSoon],
    Field(discriminator="kind"),
]
