"""Shared API dependencies"""

import httpx
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..services.connection_directory import ConnectionDirectory
from ..services.example_trigger import ExampleRecordTrigger
from ..services.local_store import LocalSettingStore
from ..services.remote_store import RemoteSettingStore
from ..services.settings_service import SettingsService


async def get_http_client():
    """HTTP client for remote vault calls, closed after the request"""
    client = httpx.AsyncClient(timeout=settings.REMOTE_TIMEOUT)
    try:
        yield client
    finally:
        await client.aclose()


def get_settings_service(
    db: AsyncSession = Depends(get_db),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> SettingsService:
    """Settings service wired to the request's session and HTTP client"""
    directory = ConnectionDirectory(db)
    return SettingsService(
        LocalSettingStore(db), RemoteSettingStore(directory, client=client)
    )


def get_example_trigger(
    db: AsyncSession = Depends(get_db),
    service: SettingsService = Depends(get_settings_service),
) -> ExampleRecordTrigger:
    return ExampleRecordTrigger(service, ConnectionDirectory(db))
