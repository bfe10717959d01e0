"""
Unit tests for RemoteSettingStore.

Tests cover:
- Query and vobjects request formats sent to the remote vault
- Parsing of query responses
- Failure masking: every failure is logged and reported as None
"""

import json
import logging
from urllib.parse import parse_qs

import httpx
import pytest

from vault_settings.services.connection_directory import ConnectionDirectory
from vault_settings.services.remote_store import RemoteSettingStore

from .conftest import REMOTE_BASE_URL, REMOTE_CONNECTION, REMOTE_TOKEN

NAME = "vault_settings.schemas.settings.ExampleSettings"


def _error_messages(caplog):
    return [r.getMessage() for r in caplog.records if r.levelno >= logging.ERROR]


class TestBuildQuery:
    @pytest.mark.asyncio
    async def test_selects_json_by_name(self, remote_store):
        assert remote_store.build_query(NAME) == (
            "SELECT LONGTEXT(json__c) FROM vsdk_setting__c"
            f" WHERE name__v = '{NAME}'"
        )

    @pytest.mark.asyncio
    async def test_escapes_quotes(self, remote_store):
        assert remote_store.build_query("it's").endswith("WHERE name__v = 'it\\'s'")


class TestFind:
    @pytest.mark.asyncio
    async def test_sends_query_request(self, remote_store, connection, fake_vault):
        await remote_store.find(NAME, REMOTE_CONNECTION)

        assert len(fake_vault.requests) == 1
        request = fake_vault.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{REMOTE_BASE_URL}/api/v21.2/query"
        assert request.headers["Authorization"] == f"Bearer {REMOTE_TOKEN}"
        form = parse_qs(request.content.decode())
        assert form["q"] == [remote_store.build_query(NAME)]

    @pytest.mark.asyncio
    async def test_missing_record_returns_none(self, remote_store, connection):
        assert await remote_store.find(NAME, REMOTE_CONNECTION) is None

    @pytest.mark.asyncio
    async def test_returns_stored_record(self, remote_store, connection, fake_vault):
        fake_vault.records[NAME] = '{"batch_size":250}'

        record = await remote_store.find(NAME, REMOTE_CONNECTION)

        assert record is not None
        assert record.json_value == '{"batch_size":250}'

    @pytest.mark.asyncio
    async def test_first_row_wins(self, db, connection):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "responseStatus": "SUCCESS",
                    "data": [{"json__c": '{"n":1}'}, {"json__c": '{"n":2}'}],
                },
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = RemoteSettingStore(ConnectionDirectory(db), client=client)
            record = await store.find(NAME, REMOTE_CONNECTION)

        assert record.json_value == '{"n":1}'

    @pytest.mark.asyncio
    async def test_rows_without_json_are_skipped(self, db, connection):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "responseStatus": "SUCCESS",
                    "data": [{"json__c": None}, {"json__c": '{"n":2}'}],
                },
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = RemoteSettingStore(ConnectionDirectory(db), client=client)
            record = await store.find(NAME, REMOTE_CONNECTION)

        assert record.json_value == '{"n":2}'

    @pytest.mark.asyncio
    async def test_server_error_returns_none_and_logs(
        self, remote_store, connection, fake_vault, caplog
    ):
        fake_vault.fail_status = 503

        assert await remote_store.find(NAME, REMOTE_CONNECTION) is None
        assert any("503" in message for message in _error_messages(caplog))

    @pytest.mark.asyncio
    async def test_failure_status_in_body_returns_none(self, db, connection, caplog):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "responseStatus": "FAILURE",
                    "errors": [{"type": "MALFORMED_QUERY", "message": "bad VQL"}],
                },
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = RemoteSettingStore(ConnectionDirectory(db), client=client)
            assert await store.find(NAME, REMOTE_CONNECTION) is None

        assert any("MALFORMED_QUERY" in m for m in _error_messages(caplog))

    @pytest.mark.asyncio
    async def test_invalid_json_returns_none(self, db, connection, caplog):
        def handler(request):
            return httpx.Response(200, text="<html>login</html>")

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = RemoteSettingStore(ConnectionDirectory(db), client=client)
            assert await store.find(NAME, REMOTE_CONNECTION) is None

        assert _error_messages(caplog)

    @pytest.mark.asyncio
    async def test_transport_error_returns_none(
        self, remote_store, connection, fake_vault, caplog
    ):
        fake_vault.raise_error = httpx.ConnectTimeout("timed out")

        assert await remote_store.find(NAME, REMOTE_CONNECTION) is None
        assert _error_messages(caplog)

    @pytest.mark.asyncio
    async def test_unknown_connection_returns_none_without_request(
        self, remote_store, fake_vault, caplog
    ):
        assert await remote_store.find(NAME, "nowhere") is None
        assert fake_vault.requests == []
        assert any("nowhere" in m for m in _error_messages(caplog))


class TestUpsert:
    @pytest.mark.asyncio
    async def test_sends_record_to_vobjects(self, remote_store, connection, fake_vault):
        record = await remote_store.upsert(NAME, '{"batch_size":500}', REMOTE_CONNECTION)

        assert record is not None
        assert record.name == NAME
        request = fake_vault.requests_to("/vobjects/vsdk_setting__c")[0]
        assert request.method == "POST"
        assert request.url.params["idParam"] == "name__v"
        assert json.loads(request.content) == [
            {"name__v": NAME, "json__c": '{"batch_size":500}'}
        ]
        assert fake_vault.records[NAME] == '{"batch_size":500}'

    @pytest.mark.asyncio
    async def test_server_error_returns_none(
        self, remote_store, connection, fake_vault, caplog
    ):
        fake_vault.fail_status = 500

        assert await remote_store.upsert(NAME, "{}", REMOTE_CONNECTION) is None
        assert _error_messages(caplog)

    @pytest.mark.asyncio
    async def test_rejected_record_returns_none(self, db, connection, caplog):
        def handler(request):
            return httpx.Response(
                200,
                json={
                    "responseStatus": "SUCCESS",
                    "data": [
                        {
                            "responseStatus": "FAILURE",
                            "errors": [
                                {"type": "INVALID_DATA", "message": "json__c too long"}
                            ],
                        }
                    ],
                },
            )

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            store = RemoteSettingStore(ConnectionDirectory(db), client=client)
            assert await store.upsert(NAME, "{}", REMOTE_CONNECTION) is None

        assert any("INVALID_DATA" in m for m in _error_messages(caplog))


@pytest.mark.asyncio
async def test_close_closes_client(db):
    store = RemoteSettingStore(ConnectionDirectory(db))
    await store.close()
    assert store.client.is_closed
