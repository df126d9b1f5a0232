import logging
from datetime import datetime
from urllib.parse import quote

import httpx

from app.core.errors import MessageBirdError

logger = logging.getLogger(__name__)


def _error_detail(resp: httpx.Response) -> str:
    """Join MessageBird's errors[].description, falling back to the raw body."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        errors = []
    descriptions = [e.get("description") for e in errors if isinstance(e, dict) and e.get("description")]
    if descriptions:
        return "; ".join(descriptions)
    return f"MessageBird request failed with status {resp.status_code}"


class MessageBirdClient:
    """Async REST client for the two MessageBird calls used here.

    Holds a single httpx.AsyncClient; safe to share across requests.
    """

    def __init__(
        self,
        access_key: str,
        base_url: str = "https://rest.messagebird.com",
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout_seconds,
            transport=transport,
            headers={
                "Authorization": f"AccessKey {access_key}",
                "Accept": "application/json",
            },
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def _request(self, method: str, path: str, **kwargs) -> dict:
        try:
            resp = await self._http.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("MessageBird %s %s failed: %s", method, path, e)
            raise MessageBirdError(f"Could not reach MessageBird: {e}") from e
        if resp.status_code >= 400:
            detail = _error_detail(resp)
            logger.warning(
                "MessageBird %s %s returned status=%s: %s", method, path, resp.status_code, detail
            )
            raise MessageBirdError(detail, status_code=resp.status_code)
        try:
            data = resp.json()
        except ValueError as e:
            logger.warning("MessageBird %s %s returned a non-JSON body: %s", method, path, resp.text[:200])
            raise MessageBirdError("Unexpected response from MessageBird", status_code=resp.status_code) from e
        if not isinstance(data, dict):
            raise MessageBirdError("Unexpected response from MessageBird", status_code=resp.status_code)
        return data

    async def lookup(self, phone_number: str, country_code: str) -> dict:
        return await self._request(
            "GET",
            f"/lookup/{quote(phone_number, safe='')}",
            params={"countryCode": country_code},
        )

    async def create_message(
        self,
        originator: str,
        recipients: list[str],
        body: str,
        scheduled_at: datetime | None = None,
    ) -> dict:
        payload: dict = {
            "originator": originator,
            "recipients": recipients,
            "body": body,
        }
        if scheduled_at is not None:
            # RFC 3339 with offset, e.g. 2024-03-01T11:00:00+01:00
            payload["scheduledDatetime"] = scheduled_at.isoformat(timespec="seconds")
        return await self._request("POST", "/messages", json=payload)
