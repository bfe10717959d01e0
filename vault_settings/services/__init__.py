"""Services layer"""

from .connection_directory import ConnectionDirectory
from .example_trigger import ExampleRecordTrigger
from .local_store import LocalSettingStore
from .log_service import LogService
from .remote_store import RemoteSettingStore
from .serializer import SettingsSerializer
from .settings_service import SettingsService

__all__ = [
    "LogService",
    "SettingsSerializer",
    "LocalSettingStore",
    "RemoteSettingStore",
    "ConnectionDirectory",
    "SettingsService",
    "ExampleRecordTrigger",
]
