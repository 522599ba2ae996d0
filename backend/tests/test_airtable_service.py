"""
Album API — Airtable Table Unit Tests (Mocked Transport)
=========================================================

What:  Tests for AirtableTable against httpx.MockTransport.
Why:   Tests should not make real API calls (needs credentials and network).
How:   A handler function plays Airtable: it records each request and returns
       canned responses.

What we test:
    ✅ Request shape: URL, auth header, create payload
    ✅ Record parsing for list / get / create
    ✅ 404 on get → None; other statuses → BackendError
    ✅ Transport errors → BackendError, exactly one attempt (no retry)
"""

import json

import httpx
import pytest

from albumapi.exceptions import BackendError
from albumapi.services.airtable_service import AirtableTable, build_async_client


def make_table(test_settings, handler):
    client = build_async_client(test_settings, transport=httpx.MockTransport(handler))
    return AirtableTable(test_settings, client=client)


RECORD = {
    "id": "recABC",
    "createdTime": "2024-01-15T12:00:00.000Z",
    "fields": {"id": "1", "title": "Blue Train", "artist": "John Coltrane", "price": 56.99},
}


class TestListRecords:

    @pytest.mark.asyncio
    async def test_list_sends_authenticated_request(self, test_settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"records": [RECORD]})

        table = make_table(test_settings, handler)
        records = await table.list_records()

        assert len(seen) == 1
        assert seen[0].method == "GET"
        assert str(seen[0].url) == "https://airtable.test/v0/appTEST/Albums"
        assert seen[0].headers["Authorization"] == "Bearer test-token-not-real"
        assert records[0].id == "recABC"
        assert records[0].fields["title"] == "Blue Train"
        assert records[0].created_time == "2024-01-15T12:00:00.000Z"

    @pytest.mark.asyncio
    async def test_empty_table(self, test_settings):
        table = make_table(test_settings, lambda request: httpx.Response(200, json={"records": []}))
        assert await table.list_records() == []

    @pytest.mark.asyncio
    async def test_record_without_fields(self, test_settings):
        payload = {"records": [{"id": "recEMPTY", "createdTime": "2024-01-15T12:00:00.000Z"}]}
        table = make_table(test_settings, lambda request: httpx.Response(200, json=payload))
        records = await table.list_records()
        assert records[0].fields == {}

    @pytest.mark.asyncio
    async def test_auth_failure_carries_backend_text(self, test_settings):
        body = {"error": {"type": "AUTHENTICATION_REQUIRED", "message": "Authentication required"}}
        table = make_table(test_settings, lambda request: httpx.Response(401, json=body))

        with pytest.raises(BackendError) as exc_info:
            await table.list_records()

        assert exc_info.value.status_code == 401
        assert "AUTHENTICATION_REQUIRED" in exc_info.value.message
        assert "Authentication required" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_transport_error_is_not_retried(self, test_settings):
        attempts = []

        def handler(request):
            attempts.append(request)
            raise httpx.ConnectError("connection refused", request=request)

        table = make_table(test_settings, handler)
        with pytest.raises(BackendError) as exc_info:
            await table.list_records()

        assert len(attempts) == 1
        assert exc_info.value.status_code is None
        assert "connection refused" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_unexpected_body_shape(self, test_settings):
        table = make_table(test_settings, lambda request: httpx.Response(200, json={"rows": []}))
        with pytest.raises(BackendError):
            await table.list_records()

    @pytest.mark.asyncio
    async def test_invalid_json_body(self, test_settings):
        table = make_table(test_settings, lambda request: httpx.Response(200, text="<html>"))
        with pytest.raises(BackendError):
            await table.list_records()


class TestGetRecord:

    @pytest.mark.asyncio
    async def test_found(self, test_settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=RECORD)

        table = make_table(test_settings, handler)
        record = await table.get_record("recABC")

        assert seen[0].url.path == "/v0/appTEST/Albums/recABC"
        assert record.id == "recABC"
        assert record.fields["artist"] == "John Coltrane"

    @pytest.mark.asyncio
    async def test_not_found_returns_none(self, test_settings):
        body = {"error": "NOT_FOUND"}
        table = make_table(test_settings, lambda request: httpx.Response(404, json=body))
        assert await table.get_record("recMISSING") is None

    @pytest.mark.asyncio
    async def test_rejected_identifier_is_backend_error(self, test_settings):
        body = {"error": {"type": "INVALID_RECORD_ID", "message": "Invalid record id"}}
        table = make_table(test_settings, lambda request: httpx.Response(422, json=body))

        with pytest.raises(BackendError) as exc_info:
            await table.get_record("not-a-record")

        assert exc_info.value.status_code == 422
        assert "INVALID_RECORD_ID" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_identifier_is_url_quoted(self, test_settings):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(404, json={"error": "NOT_FOUND"})

        table = make_table(test_settings, handler)
        await table.get_record("a b?c")

        assert seen[0].url.raw_path == b"/v0/appTEST/Albums/a%20b%3Fc"


class TestCreateRecords:

    @pytest.mark.asyncio
    async def test_create_payload_and_result(self, test_settings):
        seen = []

        def handler(request):
            seen.append(json.loads(request.content))
            return httpx.Response(200, json={"records": [RECORD]})

        table = make_table(test_settings, handler)
        created = await table.create_records([RECORD["fields"]])

        assert seen == [{"records": [{"fields": RECORD["fields"]}]}]
        assert [r.id for r in created] == ["recABC"]

    @pytest.mark.asyncio
    async def test_create_rejected(self, test_settings):
        body = {"error": {"type": "UNKNOWN_FIELD_NAME", "message": 'Unknown field name: "price"'}}
        table = make_table(test_settings, lambda request: httpx.Response(422, json=body))

        with pytest.raises(BackendError) as exc_info:
            await table.create_records([{"price": 1.0}])

        assert exc_info.value.status_code == 422


@pytest.mark.asyncio
async def test_aclose_closes_client(test_settings):
    client = build_async_client(
        test_settings,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"records": []})),
    )
    table = AirtableTable(test_settings, client=client)
    await table.aclose()
    assert client.is_closed
