from datetime import datetime

from pydantic import BaseModel


class ScheduledMessage(BaseModel):
    id: str
    recipient: str
    scheduled_at: datetime | None = None
