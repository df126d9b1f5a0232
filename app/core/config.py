from datetime import time, timedelta
from pathlib import Path
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from app.models.booking import BusinessHours

# Resolve .env from the project root so it loads regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=(str(_ENV_FILE), ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # MessageBird (phone lookup + scheduled SMS)
    messagebird_access_key: str = ""
    messagebird_base_url: str = "https://rest.messagebird.com"
    messagebird_timeout_seconds: float = 10.0

    # Booking rules. Appointments are never booked across timezones.
    timezone: str = "Europe/Amsterdam"
    opens_at: time = time(9, 0)
    closes_at: time = time(18, 0)
    # Minimum time between now and the appointment; also how early the reminder goes out
    lead_time_minutes: int = 180

    # Reminder SMS
    originator: str = "BeautyBird"
    phone_region: str = "NL"

    # Branding
    site_name: str = "BeautyBird"

    # Env
    env: str = "development"
    port: int = 8080

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v!r}") from e
        return v

    @field_validator("lead_time_minutes")
    @classmethod
    def _positive_lead_time(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("lead_time_minutes must be > 0")
        return v

    @model_validator(mode="after")
    def _closing_after_opening(self) -> "Settings":
        if self.closes_at <= self.opens_at:
            raise ValueError("closes_at must be later than opens_at")
        return self

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def business_hours(self) -> BusinessHours:
        return BusinessHours(opens_at=self.opens_at, closes_at=self.closes_at)

    @property
    def lead_time(self) -> timedelta:
        return timedelta(minutes=self.lead_time_minutes)

    @property
    def messagebird_enabled(self) -> bool:
        return bool(self.messagebird_access_key)


settings = Settings()
