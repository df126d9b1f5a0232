from app.models.booking import ValidationOutcome


class BookingError(Exception):
    """A booking that cannot go ahead; rendered back to the user with the form."""


class InputMalformedError(BookingError):
    pass


class PhoneInvalidError(BookingError):
    pass


class TimeRejectedError(BookingError):
    def __init__(self, outcome: ValidationOutcome) -> None:
        super().__init__(outcome.kind)
        self.outcome = outcome


class SchedulingFailedError(BookingError):
    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class MessageBirdError(Exception):
    """Transport or API failure talking to MessageBird."""

    def __init__(self, detail: str, status_code: int | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
