import logging
from typing import Protocol

from app.core.errors import MessageBirdError
from app.services.messagebird_client import MessageBirdClient

logger = logging.getLogger(__name__)

# Statuses MessageBird uses for numbers it cannot parse or does not know
_INVALID_NUMBER_STATUSES = {400, 404, 422}


class PhoneValidator(Protocol):
    async def check(self, number: str, region: str) -> bool: ...


class MessageBirdPhoneValidator:
    def __init__(self, client: MessageBirdClient) -> None:
        self._client = client

    async def check(self, number: str, region: str) -> bool:
        """True if MessageBird's lookup accepts the number for the region.

        Raises MessageBirdError on anything other than an invalid number.
        """
        if not number.strip():
            return False
        try:
            await self._client.lookup(number.strip(), region)
        except MessageBirdError as e:
            if e.status_code in _INVALID_NUMBER_STATUSES:
                logger.info("Phone lookup rejected %s: %s", number, e.detail)
                return False
            raise
        return True
