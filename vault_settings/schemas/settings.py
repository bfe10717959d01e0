"""Settings schemas"""

from decimal import Decimal
from typing import Any, ClassVar, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, Field


class SettingsModel(BaseModel):
    """Base class for typed settings documents.

    Fields map to JSON keys through their aliases. Unknown keys in stored
    JSON are ignored so older code can read newer documents.
    """

    # Overrides the logical name derived from the class path
    SETTING_NAME: ClassVar[Optional[str]] = None

    class Config:
        extra = "ignore"
        populate_by_name = True
        validate_assignment = True

    @classmethod
    def default(cls):
        """Build the model used when no stored document exists"""
        return cls()


S = TypeVar("S", bound=SettingsModel)

# Logical name -> settings type, used by the API to look up documents
SETTINGS_TYPES: Dict[str, Type[SettingsModel]] = {}


def setting_name(settings_type: Type[SettingsModel]) -> str:
    """Logical name of a settings type (fully qualified class name)"""
    if settings_type.SETTING_NAME:
        return settings_type.SETTING_NAME
    return f"{settings_type.__module__}.{settings_type.__qualname__}"


def register_settings(settings_type: Type[S]) -> Type[S]:
    """Class decorator exposing a settings type through the API"""
    SETTINGS_TYPES[setting_name(settings_type)] = settings_type
    return settings_type


@register_settings
class ExampleSettings(SettingsModel):
    """Example settings shared by the local and remote vaults"""

    batch_size: Optional[Decimal] = Field(None, alias="batch_size")
    status_types: Optional[List[str]] = Field(None, alias="status_types")

    @classmethod
    def default(cls):
        return cls(batch_size=Decimal(500), status_types=["pending"])


class SettingRecordModel(BaseModel):
    """A single vsdk_setting__c record as sent to or read from a remote vault"""

    name: Optional[str] = Field(None, alias="name__v")
    json_value: Optional[str] = Field(None, alias="json__c")

    class Config:
        extra = "ignore"
        populate_by_name = True


class SettingQueryResponse(BaseModel):
    """Query response returned by a remote vault"""

    response_status: Optional[str] = Field(None, alias="responseStatus")
    data: List[SettingRecordModel] = []
    errors: List[Dict[str, Any]] = []

    class Config:
        extra = "ignore"
        populate_by_name = True


class SettingsDocument(BaseModel):
    """Settings document response"""

    name: str
    settings: Dict[str, Any]


class SettingsTypeList(BaseModel):
    """Registered settings types"""

    names: List[str]
