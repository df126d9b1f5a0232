from datetime import datetime

from fastapi import Depends, Request

from app.core.config import Settings, settings
from app.services.messagebird_client import MessageBirdClient
from app.services.phone_service import MessageBirdPhoneValidator, PhoneValidator
from app.services.reminder_service import MessageBirdNotificationScheduler, NotificationScheduler


def get_settings() -> Settings:
    return settings


def get_now(app_settings: Settings = Depends(get_settings)) -> datetime:
    """Current time in the salon's timezone."""
    return datetime.now(app_settings.zone)


def get_messagebird_client(request: Request) -> MessageBirdClient:
    """Shared client created in the app lifespan."""
    return request.app.state.messagebird


def get_phone_validator(
    client: MessageBirdClient = Depends(get_messagebird_client),
) -> PhoneValidator:
    return MessageBirdPhoneValidator(client)


def get_notification_scheduler(
    client: MessageBirdClient = Depends(get_messagebird_client),
) -> NotificationScheduler:
    return MessageBirdNotificationScheduler(client)
