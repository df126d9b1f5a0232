from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from app.core.config import Settings
from app.core.errors import MessageBirdError
from app.models.message import ScheduledMessage

AMSTERDAM = ZoneInfo("Europe/Amsterdam")


class FakePhoneValidator:
    def __init__(self, valid_numbers: set[str] | None = None, error: Exception | None = None) -> None:
        self.valid_numbers = valid_numbers or set()
        self.error = error
        self.calls: list[tuple[str, str]] = []

    async def check(self, number: str, region: str) -> bool:
        self.calls.append((number, region))
        if self.error is not None:
            raise self.error
        return number in self.valid_numbers


class FakeScheduler:
    def __init__(self, error: MessageBirdError | None = None) -> None:
        self.error = error
        self.calls: list[dict] = []

    async def schedule(self, originator: str, destination: str, body: str, send_at: datetime) -> ScheduledMessage:
        self.calls.append(
            {"originator": originator, "destination": destination, "body": body, "send_at": send_at}
        )
        if self.error is not None:
            raise self.error
        return ScheduledMessage(id="msg-1", recipient=destination, scheduled_at=send_at)


@pytest.fixture
def settings() -> Settings:
    # Explicit values so a local .env cannot change test results.
    return Settings(
        messagebird_access_key="test-key",
        timezone="Europe/Amsterdam",
        opens_at="09:00",
        closes_at="18:00",
        lead_time_minutes=180,
        originator="BeautyBird",
        phone_region="NL",
        site_name="BeautyBird",
    )


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 3, 1, 10, 0, tzinfo=AMSTERDAM)


@pytest.fixture
def phone_validator() -> FakePhoneValidator:
    return FakePhoneValidator(valid_numbers={"+31612345678"})


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def make_phone_validator():
    return FakePhoneValidator


@pytest.fixture
def make_scheduler():
    return FakeScheduler
