"""Local settings table access"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..exceptions import StorageWriteError
from ..models.setting import SettingRecord
from .log_service import log_service


class LocalSettingStore:
    """Find and upsert settings records in the local database"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find(self, name: str) -> Optional[SettingRecord]:
        """Get the record stored under name, or None"""
        result = await self.db.execute(
            select(SettingRecord).where(SettingRecord.name == name)
        )
        # name is unique, but never fail on a duplicated legacy table
        return result.scalars().first()

    async def upsert(self, name: str, json: str) -> SettingRecord:
        """
        Replace the JSON of an existing record or create a new one.

        The write runs in a savepoint and is committed by whoever owns the
        session. On failure only the savepoint is rolled back and
        StorageWriteError is raised, so no partial write is visible.
        """
        try:
            async with self.db.begin_nested():
                record = await self.find(name)
                if record:
                    record.json = json
                else:
                    record = SettingRecord(name=name, json=json)
                    self.db.add(record)
                await self.db.flush()
        except IntegrityError:
            # Another writer created the record between find and flush
            log_service.info(f"Setting {name} created concurrently, updating instead")
            return await self._update_existing(name, json)
        except SQLAlchemyError as e:
            log_service.error(f"Failed to save setting {name}: {e}")
            raise StorageWriteError(f"Failed to save setting {name}: {e}") from e

        await self.db.refresh(record)
        return record

    async def _update_existing(self, name: str, json: str) -> SettingRecord:
        try:
            async with self.db.begin_nested():
                record = await self.find(name)
                if record is None:
                    raise StorageWriteError(f"Setting {name} vanished during save")
                record.json = json
                await self.db.flush()
        except SQLAlchemyError as e:
            log_service.error(f"Failed to save setting {name}: {e}")
            raise StorageWriteError(f"Failed to save setting {name}: {e}") from e

        await self.db.refresh(record)
        return record
