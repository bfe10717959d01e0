"""Example record trigger"""

from decimal import Decimal
from typing import Optional

from ..models.example_record import ExampleRecord
from ..schemas.settings import ExampleSettings
from .connection_directory import ConnectionDirectory
from .log_service import log_service
from .settings_service import SettingsService


def _plain(value: Optional[Decimal]) -> str:
    """Render a decimal without exponent notation"""
    if value is None:
        return ""
    return format(value, "f")


class ExampleRecordTrigger:
    """
    Runs before an example record is inserted or updated.

    Loads the local settings, and the remote settings when the record names
    a connection, then writes the batch sizes into the record's results.
    Missing settings are created with defaults on the way.
    """

    def __init__(self, settings: SettingsService, directory: ConnectionDirectory):
        self.settings = settings
        self.directory = directory

    async def execute(self, record: ExampleRecord) -> ExampleRecord:
        local_settings = await self.get_local_settings()
        results = [f"<b>Local Batch Size</b>: {_plain(local_settings.batch_size)}"]

        if record.remote_connection_id is not None:
            connection_name = await self.directory.resolve(record.remote_connection_id)
            if connection_name is None:
                log_service.error(
                    f"Connection {record.remote_connection_id} not found for record {record.name}"
                )
            else:
                remote_settings = await self.get_remote_settings(connection_name)
                results.append(
                    f"<b>Remote Batch Size</b>: {_plain(remote_settings.batch_size)}"
                )

        record.results = "<br> ".join(results)
        return record

    async def get_local_settings(self) -> ExampleSettings:
        """Get the example settings from the local table, creating them if missing"""
        model = await self.settings.get_or_create_local(ExampleSettings)
        log_service.debug(f"Current Local BatchSize = {model.batch_size}")
        return model

    async def get_remote_settings(self, connection_name: str) -> ExampleSettings:
        """Get the example settings from a remote vault, creating them if missing"""
        model = await self.settings.get_or_create_remote(ExampleSettings, connection_name)
        log_service.debug(f"Current Remote BatchSize = {model.batch_size}")
        return model
