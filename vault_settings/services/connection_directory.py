"""Remote connection lookup"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.connection import Connection


class ConnectionDirectory:
    """Resolve connection ids and names to remote vault endpoints"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, connection_id: int) -> Optional[str]:
        """Get the connection name for connection_id (None if not found)"""
        result = await self.db.execute(
            select(Connection.api_name).where(Connection.id == connection_id)
        )
        return result.scalars().first()

    async def get_endpoint(self, connection_name: str) -> Optional[Connection]:
        """Get the connection registered under connection_name"""
        result = await self.db.execute(
            select(Connection).where(Connection.api_name == connection_name)
        )
        return result.scalar_one_or_none()

    async def get(self, connection_id: int) -> Optional[Connection]:
        """Get connection by id"""
        return await self.db.get(Connection, connection_id)

    async def list_connections(self) -> List[Connection]:
        """Get all registered connections"""
        result = await self.db.execute(select(Connection).order_by(Connection.api_name))
        return list(result.scalars().all())

    async def create_connection(
        self, api_name: str, base_url: str, auth_token: Optional[str] = None
    ) -> Connection:
        """Register a remote vault endpoint"""
        connection = Connection(
            api_name=api_name,
            base_url=base_url.rstrip("/"),
            auth_token=auth_token,
        )
        self.db.add(connection)
        await self.db.commit()
        await self.db.refresh(connection)
        return connection
