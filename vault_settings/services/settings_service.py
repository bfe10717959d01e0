"""Tiered settings service"""

from typing import Callable, Optional, Type

from ..config import settings as app_settings
from ..schemas.settings import S, setting_name
from .local_store import LocalSettingStore
from .log_service import log_service
from .remote_store import RemoteSettingStore
from .serializer import SettingsSerializer


class SettingsService:
    """
    Load and save typed settings in the local table and on remote vaults.

    Nothing is cached between calls: every get reads the store again.
    """

    def __init__(
        self,
        local: LocalSettingStore,
        remote: RemoteSettingStore,
        serializer: Optional[SettingsSerializer] = None,
        persist_remote_defaults_locally: Optional[bool] = None,
    ):
        self.local = local
        self.remote = remote
        self.serializer = serializer or SettingsSerializer()
        if persist_remote_defaults_locally is None:
            persist_remote_defaults_locally = (
                app_settings.PERSIST_REMOTE_DEFAULTS_LOCALLY
            )
        self.persist_remote_defaults_locally = persist_remote_defaults_locally

    @staticmethod
    def setting_name(settings_type: Type[S]) -> str:
        return setting_name(settings_type)

    async def get_local_settings(self, settings_type: Type[S]) -> Optional[S]:
        """Get settings from the local table (None if not stored)"""
        record = await self.local.find(setting_name(settings_type))
        if record is None or record.json is None:
            return None
        return self.serializer.deserialize(record.json, settings_type)

    async def save_local_settings(self, model: S, settings_type: Type[S]):
        """Save settings to the local table"""
        json = self.serializer.serialize(model)
        await self.local.upsert(setting_name(settings_type), json)

    async def get_remote_settings(
        self, settings_type: Type[S], connection_name: str
    ) -> Optional[S]:
        """Get settings from a remote vault (None if not found or unreachable)"""
        record = await self.remote.find(setting_name(settings_type), connection_name)
        if record is None:
            return None
        return self.serializer.deserialize(record.json_value, settings_type)

    async def save_remote_settings(
        self, model: S, settings_type: Type[S], connection_name: str
    ) -> bool:
        """Save settings to a remote vault. Failures are logged, not raised."""
        json = self.serializer.serialize(model)
        record = await self.remote.upsert(
            setting_name(settings_type), json, connection_name
        )
        return record is not None

    async def get_or_create_local(
        self,
        settings_type: Type[S],
        default_factory: Optional[Callable[[], S]] = None,
    ) -> S:
        """Get local settings, storing the default first if none exist"""
        model = await self.get_local_settings(settings_type)
        if model is not None:
            return model

        model = (default_factory or settings_type.default)()
        log_service.info(f"Creating default local settings {setting_name(settings_type)}")
        await self.save_local_settings(model, settings_type)
        return model

    async def get_or_create_remote(
        self,
        settings_type: Type[S],
        connection_name: str,
        default_factory: Optional[Callable[[], S]] = None,
    ) -> S:
        """
        Get remote settings, storing the default first if none are found.

        A new default is written to the local table as well as the remote
        vault unless persist_remote_defaults_locally is off. A failed remote
        read is handled exactly like a missing record.
        """
        model = await self.get_remote_settings(settings_type, connection_name)
        if model is not None:
            return model

        model = (default_factory or settings_type.default)()
        log_service.info(
            f"Creating default remote settings {setting_name(settings_type)} via {connection_name}"
        )
        if self.persist_remote_defaults_locally:
            await self.save_local_settings(model, settings_type)
        await self.save_remote_settings(model, settings_type, connection_name)
        return model
