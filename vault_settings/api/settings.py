"""Settings API routes"""

import json
from typing import Any, Dict, Type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import ValidationError

from ..exceptions import SettingsError
from ..schemas.settings import (
    SETTINGS_TYPES,
    SettingsDocument,
    SettingsModel,
    SettingsTypeList,
)
from ..services.log_service import log_service
from ..services.settings_service import SettingsService
from .deps import get_settings_service

router = APIRouter(prefix="/api/settings", tags=["settings"])


def _settings_type(name: str) -> Type[SettingsModel]:
    settings_type = SETTINGS_TYPES.get(name)
    if settings_type is None:
        raise HTTPException(status_code=404, detail=f"Unknown settings type: {name}")
    return settings_type


def _parse(settings_type: Type[SettingsModel], data: Dict[str, Any]) -> SettingsModel:
    try:
        return settings_type.model_validate(data)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid settings: {e}")


def _document(
    name: str, model: SettingsModel, service: SettingsService
) -> SettingsDocument:
    # Same JSON as stored, so decimals come back as numbers
    return SettingsDocument(
        name=name, settings=json.loads(service.serializer.serialize(model))
    )


@router.get("/", response_model=SettingsTypeList)
async def list_settings_types():
    """List registered settings types"""
    return SettingsTypeList(names=sorted(SETTINGS_TYPES))


@router.get("/{name}", response_model=SettingsDocument)
async def get_local_settings(
    name: str, service: SettingsService = Depends(get_settings_service)
):
    """Get local settings, creating the defaults if none are stored"""
    settings_type = _settings_type(name)

    try:
        model = await service.get_or_create_local(settings_type)
    except SettingsError as e:
        log_service.error(f"Failed to load settings {name}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to load settings: {str(e)}"
        )

    return _document(name, model, service)


@router.put("/{name}", response_model=SettingsDocument)
async def update_local_settings(
    name: str,
    data: Dict[str, Any],
    service: SettingsService = Depends(get_settings_service),
):
    """Replace local settings"""
    settings_type = _settings_type(name)
    model = _parse(settings_type, data)

    try:
        await service.save_local_settings(model, settings_type)
    except SettingsError as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to save settings: {str(e)}"
        )

    return _document(name, model, service)


@router.get("/{name}/remote/{connection_name}", response_model=SettingsDocument)
async def get_remote_settings(
    name: str,
    connection_name: str,
    service: SettingsService = Depends(get_settings_service),
):
    """Get settings from a remote vault, creating the defaults if none are found"""
    settings_type = _settings_type(name)

    try:
        model = await service.get_or_create_remote(settings_type, connection_name)
    except SettingsError as e:
        log_service.error(f"Failed to load remote settings {name}: {e}")
        raise HTTPException(
            status_code=500, detail=f"Failed to load settings: {str(e)}"
        )

    return _document(name, model, service)


@router.put("/{name}/remote/{connection_name}", response_model=SettingsDocument)
async def update_remote_settings(
    name: str,
    connection_name: str,
    data: Dict[str, Any],
    service: SettingsService = Depends(get_settings_service),
):
    """Replace settings on a remote vault"""
    settings_type = _settings_type(name)
    model = _parse(settings_type, data)

    try:
        saved = await service.save_remote_settings(
            model, settings_type, connection_name
        )
    except SettingsError as e:
        raise HTTPException(
            status_code=500, detail=f"Failed to save settings: {str(e)}"
        )

    if not saved:
        raise HTTPException(
            status_code=502, detail="Failed to save settings to the remote vault"
        )

    return _document(name, model, service)
