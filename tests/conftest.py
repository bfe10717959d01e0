"""
Shared pytest fixtures for the settings store tests.

Every test gets its own SQLite database file and an in-memory fake of the
remote vault API plugged into httpx through MockTransport.
"""

import json
import re
from typing import Dict, List, Optional
from urllib.parse import parse_qs

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from vault_settings.database import enable_sqlite_savepoints, init_db
from vault_settings.services.connection_directory import ConnectionDirectory
from vault_settings.services.local_store import LocalSettingStore
from vault_settings.services.remote_store import RemoteSettingStore
from vault_settings.services.settings_service import SettingsService

REMOTE_BASE_URL = "https://remote.example.com"
REMOTE_CONNECTION = "remote_vault"
REMOTE_TOKEN = "session-token-123"

_NAME_IN_QUERY = re.compile(r"WHERE name__v = '((?:[^'\\]|\\.)*)'$")


class FakeVault:
    """In-memory remote vault answering the query and vobjects endpoints."""

    def __init__(self):
        self.records: Dict[str, str] = {}
        self.requests: List[httpx.Request] = []
        # When set, every call answers with this HTTP status
        self.fail_status: Optional[int] = None
        # When set, every call raises this transport error
        self.raise_error: Optional[Exception] = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.raise_error is not None:
            raise self.raise_error
        if self.fail_status is not None:
            return httpx.Response(
                self.fail_status,
                json={
                    "responseStatus": "FAILURE",
                    "errors": [{"type": "UNEXPECTED_ERROR", "message": "boom"}],
                },
            )

        if request.url.path.endswith("/query"):
            query = parse_qs(request.content.decode())["q"][0]
            match = _NAME_IN_QUERY.search(query)
            name = re.sub(r"\\(.)", r"\1", match.group(1))
            data = [{"json__c": self.records[name]}] if name in self.records else []
            return httpx.Response(
                200,
                json={
                    "responseStatus": "SUCCESS",
                    "responseDetails": {"size": len(data), "total": len(data)},
                    "data": data,
                },
            )

        if "/vobjects/" in request.url.path:
            results = []
            for item in json.loads(request.content):
                self.records[item["name__v"]] = item["json__c"]
                results.append(
                    {"responseStatus": "SUCCESS", "data": {"id": f"V{len(self.records)}"}}
                )
            return httpx.Response(
                200, json={"responseStatus": "SUCCESS", "data": results}
            )

        return httpx.Response(404, json={"responseStatus": "FAILURE"})

    def requests_to(self, suffix: str) -> List[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith(suffix)]


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Fresh SQLite database with all tables created."""
    engine = enable_sqlite_savepoints(
        create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}")
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def fake_vault() -> FakeVault:
    return FakeVault()


@pytest_asyncio.fixture
async def http_client(fake_vault):
    async with httpx.AsyncClient(
        transport=httpx.MockTransport(fake_vault.handler)
    ) as client:
        yield client


@pytest_asyncio.fixture
async def connection(db):
    """The remote vault registered in the connection directory."""
    return await ConnectionDirectory(db).create_connection(
        REMOTE_CONNECTION, REMOTE_BASE_URL, REMOTE_TOKEN
    )


@pytest.fixture
def local_store(db) -> LocalSettingStore:
    return LocalSettingStore(db)


@pytest.fixture
def remote_store(db, http_client) -> RemoteSettingStore:
    return RemoteSettingStore(ConnectionDirectory(db), client=http_client)


@pytest.fixture
def settings_service(local_store, remote_store) -> SettingsService:
    return SettingsService(local_store, remote_store)
