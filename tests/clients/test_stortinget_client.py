from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from hdo_questions.clients import StortingetClient


def _client(handler) -> StortingetClient:
    return StortingetClient(
        "https://data.example.invalid/eksport/",
        user_agent="test-agent",
        transport=httpx.MockTransport(handler),
    )


def test_list_sessions_returns_ids_in_order():
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(
            200,
            json={"sesjoner_liste": [{"id": "2014-2015", "fra": "x"}, {"id": "2013-2014"}]},
        )

    async def run():
        client = _client(handler)
        try:
            return await client.list_sessions()
        finally:
            await client.aclose()

    assert asyncio.run(run()) == ["2014-2015", "2013-2014"]
    assert str(requests[0].url) == "https://data.example.invalid/eksport/sesjoner?format=json"
    assert requests[0].headers["User-Agent"] == "test-agent"


def test_list_sessions_propagates_unparseable_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>maintenance</html>")

    async def run():
        client = _client(handler)
        try:
            return await client.list_sessions()
        finally:
            await client.aclose()

    with pytest.raises(json.JSONDecodeError):
        asyncio.run(run())


def test_category_url_layout():
    client = _client(lambda request: httpx.Response(200))
    assert (
        client.category_url("interpellasjoner", "2009-2010")
        == "https://data.example.invalid/eksport/interpellasjoner?sesjonid=2009-2010&format=json"
    )
    asyncio.run(client.aclose())
