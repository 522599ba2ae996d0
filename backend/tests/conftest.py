"""
Album API — Test Configuration (conftest.py)
=============================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Tests never talk to Airtable; they run against an in-memory table.

Fixtures:
    ├── test_settings:  Settings with fake Airtable credentials (no .env read)
    ├── memory_table:   In-memory TableBackend test double
    ├── album_service:  AlbumService over memory_table
    └── test_client:    HTTPX AsyncClient talking to create_app(table=memory_table)
"""

import itertools
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from albumapi.config import Settings
from albumapi.main import create_app
from albumapi.services.album_service import AlbumService
from albumapi.services.table_base import BackendRecord, TableBackend


class InMemoryTable(TableBackend):
    """
    Dict-backed TableBackend.

    Records created with an "id" field are keyed by that value, so an album
    can be fetched back by the id it was submitted with. Records without one
    get a generated recXXXX key, as Airtable would assign.
    """

    def __init__(self, records: Optional[List[BackendRecord]] = None):
        self.records: Dict[str, BackendRecord] = {r.id: r for r in records or []}
        self.calls: List[str] = []
        self._ids = itertools.count(1)

    async def list_records(self) -> List[BackendRecord]:
        self.calls.append("list_records")
        return list(self.records.values())

    async def get_record(self, record_id: str) -> Optional[BackendRecord]:
        self.calls.append("get_record")
        return self.records.get(record_id)

    async def create_records(
        self, records: Sequence[Mapping[str, Any]]
    ) -> List[BackendRecord]:
        self.calls.append("create_records")
        created = []
        for fields in records:
            key = str(fields.get("id") or f"rec{next(self._ids):04d}")
            record = BackendRecord(id=key, fields=dict(fields), created_time="2024-01-15T12:00:00.000Z")
            self.records[key] = record
            created.append(record)
        return created


@pytest.fixture
def test_settings():
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        airtable_token="test-token-not-real",
        airtable_base_id="appTEST",
        airtable_table="Albums",
        airtable_api_url="https://airtable.test/v0",
    )


@pytest.fixture
def sample_records():
    """The three albums of the classic example data set."""
    return [
        BackendRecord(id="rec1", fields={"id": "1", "title": "Blue Train", "artist": "John Coltrane", "price": 56.99}),
        BackendRecord(id="rec2", fields={"id": "2", "title": "Jeru", "artist": "Gerry Mulligan", "price": 17.99}),
        BackendRecord(id="rec3", fields={"id": "3", "title": "Sarah Vaughan and Clifford Brown", "artist": "Sarah Vaughan", "price": 39.99}),
    ]


@pytest.fixture
def memory_table():
    return InMemoryTable()


@pytest.fixture
def album_service(memory_table):
    return AlbumService(memory_table)


@pytest_asyncio.fixture
async def test_client(test_settings, memory_table):
    """
    HTTPX AsyncClient routed directly into the app (no server, no lifespan).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/albums")
            assert response.status_code == 200
    """
    app = create_app(settings=test_settings, table=memory_table)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
