"""
Album API — Airtable Table Backend
===================================

What:  TableBackend implementation over the Airtable REST API (v0).
Why:   Airtable is the durable store for albums; this service holds no copy.
How:   One shared httpx.AsyncClient per application, authenticated with a
       Bearer token, base URL {api}/{base_id}/{table}.
Who:   Created by create_app() and used by AlbumService.
When:  One HTTP call per AlbumService operation.

Endpoints used:
    list:    GET  /{base}/{table}             → {"records": [...]}
    get:     GET  /{base}/{table}/{record_id} → record, 404 if unknown
    create:  POST /{base}/{table}             → {"records": [...]}

Error translation:
    - 404 on get_record             → None (record not found)
    - any other non-2xx status      → BackendError(status_code=...)
    - transport errors / timeouts   → BackendError(status_code=None)
    - body not the expected JSON    → BackendError
    There is no retry; the first failure is reported.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence
from urllib.parse import quote

import httpx

from albumapi.config import Settings
from albumapi.exceptions import BackendError
from albumapi.services.table_base import BackendRecord, TableBackend

logger = logging.getLogger(__name__)


def build_async_client(
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Create the httpx client used for every Airtable call."""
    return httpx.AsyncClient(
        base_url=f"{settings.airtable_api_url}/{quote(settings.airtable_base_id, safe='')}",
        headers={
            "Authorization": f"Bearer {settings.airtable_token}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        },
        timeout=httpx.Timeout(settings.airtable_timeout),
        transport=transport,
    )


def _error_text(response: httpx.Response) -> str:
    """
    Render a failed Airtable response as text.

    Airtable reports errors as {"error": {"type": ..., "message": ...}} or
    {"error": "NOT_FOUND"}; anything else is reported with the raw body.
    """
    detail = response.text.strip()
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and "error" in payload:
        error = payload["error"]
        if isinstance(error, dict):
            parts = [str(error[k]) for k in ("type", "message") if error.get(k)]
            detail = ": ".join(parts) or detail
        else:
            detail = str(error)
    return (
        f"airtable: {response.request.method} {response.request.url.path} "
        f"returned HTTP {response.status_code}: {detail}"
    )


def _parse_record(raw: Any) -> BackendRecord:
    if not isinstance(raw, dict) or not isinstance(raw.get("id"), str):
        raise BackendError(f"airtable: malformed record in response: {raw!r}")
    fields = raw.get("fields") or {}
    if not isinstance(fields, dict):
        raise BackendError(f"airtable: malformed fields in record {raw['id']}")
    return BackendRecord(id=raw["id"], fields=fields, created_time=raw.get("createdTime"))


def _parse_records(payload: Any) -> List[BackendRecord]:
    if not isinstance(payload, dict) or not isinstance(payload.get("records"), list):
        raise BackendError("airtable: response has no 'records' list")
    return [_parse_record(raw) for raw in payload["records"]]


class AirtableTable(TableBackend):
    """
    A single Airtable table.

    The instance is immutable after construction and safe to share across
    concurrent requests; httpx.AsyncClient pools connections internally.
    """

    def __init__(self, settings: Settings, client: Optional[httpx.AsyncClient] = None):
        self.table = settings.airtable_table
        self._path = f"/{quote(settings.airtable_table, safe='')}"
        self._client = client or build_async_client(settings)

        logger.info(
            "AirtableTable initialized for base=%s table=%s (timeout=%.0fs)",
            settings.airtable_base_id,
            settings.airtable_table,
            settings.airtable_timeout,
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Optional[Dict[str, Any]] = None,
        allow_not_found: bool = False,
    ) -> Optional[Any]:
        """
        Perform one Airtable call and decode its JSON body.

        Returns None only when allow_not_found is set and the backend answered 404.
        """
        logger.debug("Airtable %s %s", method, path)
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            logger.warning("Airtable %s %s failed: %s", method, path, e)
            raise BackendError(
                f"airtable: {method} {path} failed: {str(e) or type(e).__name__}",
                context={"error_type": type(e).__name__},
            ) from e

        if allow_not_found and response.status_code == 404:
            return None
        if response.is_error:
            message = _error_text(response)
            logger.warning(message)
            raise BackendError(message, status_code=response.status_code)

        try:
            return response.json()
        except ValueError as e:
            raise BackendError(
                f"airtable: {method} {path} returned invalid JSON",
                status_code=response.status_code,
            ) from e

    async def list_records(self) -> List[BackendRecord]:
        payload = await self._request("GET", self._path)
        return _parse_records(payload)

    async def get_record(self, record_id: str) -> Optional[BackendRecord]:
        payload = await self._request(
            "GET",
            f"{self._path}/{quote(record_id, safe='')}",
            allow_not_found=True,
        )
        if payload is None:
            return None
        return _parse_record(payload)

    async def create_records(
        self, records: Sequence[Mapping[str, Any]]
    ) -> List[BackendRecord]:
        body = {"records": [{"fields": dict(fields)} for fields in records]}
        payload = await self._request("POST", self._path, json=body)
        return _parse_records(payload)

    async def aclose(self) -> None:
        await self._client.aclose()
