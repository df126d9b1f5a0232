from __future__ import annotations

import asyncio
import json
from datetime import datetime
from zoneinfo import ZoneInfo

import httpx
import pytest

from app.core.errors import MessageBirdError
from app.services.messagebird_client import MessageBirdClient
from app.services.phone_service import MessageBirdPhoneValidator
from app.services.reminder_service import MessageBirdNotificationScheduler

AMSTERDAM = ZoneInfo("Europe/Amsterdam")


def _client(handler) -> MessageBirdClient:
    return MessageBirdClient(access_key="test-key", transport=httpx.MockTransport(handler))


def _errors(status: int, description: str) -> httpx.Response:
    return httpx.Response(status, json={"errors": [{"code": 21, "description": description, "parameter": None}]})


def test_lookup_sends_access_key_and_country_code() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"phoneNumber": 31612345678, "countryCode": "NL"})

    async def run() -> bool:
        client = _client(handler)
        try:
            return await MessageBirdPhoneValidator(client).check("+31612345678", "NL")
        finally:
            await client.aclose()

    assert asyncio.run(run()) is True
    request = seen[0]
    assert request.method == "GET"
    assert request.url.path == "/lookup/+31612345678"
    assert request.url.params["countryCode"] == "NL"
    assert request.headers["Authorization"] == "AccessKey test-key"


@pytest.mark.parametrize("status", [400, 404])
def test_lookup_rejection_means_invalid_number(status: int) -> None:
    async def run() -> bool:
        client = _client(lambda request: _errors(status, "phone_number is invalid"))
        try:
            return await MessageBirdPhoneValidator(client).check("12", "NL")
        finally:
            await client.aclose()

    assert asyncio.run(run()) is False


def test_blank_number_is_invalid_without_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    async def run() -> bool:
        client = _client(handler)
        try:
            return await MessageBirdPhoneValidator(client).check("   ", "NL")
        finally:
            await client.aclose()

    assert asyncio.run(run()) is False


def test_lookup_auth_failure_raises() -> None:
    async def run() -> bool:
        client = _client(lambda request: _errors(401, "Request not allowed (incorrect access_key)"))
        try:
            return await MessageBirdPhoneValidator(client).check("+31612345678", "NL")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="incorrect access_key") as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code == 401


def test_transport_error_is_wrapped() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async def run() -> dict:
        client = _client(handler)
        try:
            return await client.lookup("+31612345678", "NL")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="Could not reach MessageBird") as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code is None


def test_schedule_posts_scheduled_message() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        assert request.url.path == "/messages"
        return httpx.Response(
            201,
            json={
                "id": "e8077d803532c0b5937c639b60216938",
                "originator": "BeautyBird",
                "scheduledDatetime": "2024-03-01T10:00:00+00:00",
            },
        )

    async def run():
        client = _client(handler)
        try:
            return await MessageBirdNotificationScheduler(client).schedule(
                originator="BeautyBird",
                destination="+31612345678",
                body="Gentle reminder",
                send_at=datetime(2024, 3, 1, 11, 0, tzinfo=AMSTERDAM),
            )
        finally:
            await client.aclose()

    message = asyncio.run(run())
    assert seen[0] == {
        "originator": "BeautyBird",
        "recipients": ["+31612345678"],
        "body": "Gentle reminder",
        "scheduledDatetime": "2024-03-01T11:00:00+01:00",
    }
    assert message.id == "e8077d803532c0b5937c639b60216938"
    assert message.recipient == "+31612345678"
    assert message.scheduled_at == datetime(2024, 3, 1, 11, 0, tzinfo=AMSTERDAM)


def test_schedule_error_descriptions_are_joined() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            422,
            json={
                "errors": [
                    {"code": 9, "description": "no (correct) recipients found", "parameter": "recipients"},
                    {"code": 9, "description": "originator is too long", "parameter": "originator"},
                ]
            },
        )

    async def run():
        client = _client(handler)
        try:
            return await client.create_message("BeautyBird", ["x"], "hi")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError) as exc_info:
        asyncio.run(run())
    assert exc_info.value.detail == "no (correct) recipients found; originator is too long"
    assert exc_info.value.status_code == 422


def test_non_json_error_body_falls_back_to_status() -> None:
    async def run():
        client = _client(lambda request: httpx.Response(502, text="Bad Gateway"))
        try:
            return await client.lookup("+31612345678", "NL")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="status 502"):
        asyncio.run(run())


def test_error_body_that_is_not_an_object_falls_back_to_status() -> None:
    async def run():
        client = _client(lambda request: httpx.Response(500, json=["oops"]))
        try:
            return await client.lookup("+31612345678", "NL")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="status 500") as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code == 500


def test_non_json_success_body_raises_messagebird_error() -> None:
    async def run():
        client = _client(lambda request: httpx.Response(200, text="<html>maintenance</html>"))
        try:
            return await MessageBirdPhoneValidator(client).check("+31612345678", "NL")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="Unexpected response") as exc_info:
        asyncio.run(run())
    assert exc_info.value.status_code == 200


def test_success_body_that_is_not_an_object_raises_messagebird_error() -> None:
    async def run():
        client = _client(lambda request: httpx.Response(201, json=["oops"]))
        try:
            return await client.create_message("BeautyBird", ["+31612345678"], "hi")
        finally:
            await client.aclose()

    with pytest.raises(MessageBirdError, match="Unexpected response"):
        asyncio.run(run())


def test_schedule_keeps_requested_time_when_provider_timestamp_is_unreadable() -> None:
    send_at = datetime(2024, 3, 1, 11, 0, tzinfo=AMSTERDAM)

    async def run():
        client = _client(lambda request: httpx.Response(201, json={"id": "abc", "scheduledDatetime": "soon"}))
        try:
            return await MessageBirdNotificationScheduler(client).schedule(
                originator="BeautyBird", destination="+31612345678", body="hi", send_at=send_at
            )
        finally:
            await client.aclose()

    message = asyncio.run(run())
    assert message.id == "abc"
    assert message.scheduled_at == send_at
