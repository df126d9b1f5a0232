from datetime import datetime
from typing import Protocol

from app.models.message import ScheduledMessage
from app.services.messagebird_client import MessageBirdClient


class NotificationScheduler(Protocol):
    async def schedule(
        self, originator: str, destination: str, body: str, send_at: datetime
    ) -> ScheduledMessage: ...


class MessageBirdNotificationScheduler:
    """Hands the SMS to MessageBird, which delivers it at send_at."""

    def __init__(self, client: MessageBirdClient) -> None:
        self._client = client

    async def schedule(
        self, originator: str, destination: str, body: str, send_at: datetime
    ) -> ScheduledMessage:
        data = await self._client.create_message(
            originator=originator,
            recipients=[destination],
            body=body,
            scheduled_at=send_at,
        )
        # The message is accepted at this point; an odd timestamp must not fail the booking
        try:
            scheduled_at = datetime.fromisoformat(data["scheduledDatetime"])
        except (KeyError, TypeError, ValueError):
            scheduled_at = send_at
        return ScheduledMessage(
            id=str(data.get("id", "")),
            recipient=destination,
            scheduled_at=scheduled_at,
        )
