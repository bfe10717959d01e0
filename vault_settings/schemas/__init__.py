"""Pydantic schemas for validation"""

from .connection import ConnectionCreate, ConnectionResponse
from .example import ExampleRecordCreate, ExampleRecordResponse, ExampleRecordUpdate
from .settings import (
    SETTINGS_TYPES,
    ExampleSettings,
    SettingQueryResponse,
    SettingRecordModel,
    SettingsDocument,
    SettingsModel,
    SettingsTypeList,
    register_settings,
    setting_name,
)

__all__ = [
    "ConnectionCreate",
    "ConnectionResponse",
    "ExampleRecordCreate",
    "ExampleRecordUpdate",
    "ExampleRecordResponse",
    "SettingsModel",
    "ExampleSettings",
    "SettingRecordModel",
    "SettingQueryResponse",
    "SettingsDocument",
    "SettingsTypeList",
    "SETTINGS_TYPES",
    "register_settings",
    "setting_name",
]
