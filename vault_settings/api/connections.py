"""Connection API routes"""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.connection import ConnectionCreate, ConnectionResponse
from ..services.connection_directory import ConnectionDirectory

router = APIRouter(prefix="/api/connections", tags=["connections"])


@router.get("/", response_model=List[ConnectionResponse])
async def list_connections(db: AsyncSession = Depends(get_db)):
    """List registered remote vault connections"""
    directory = ConnectionDirectory(db)
    return await directory.list_connections()


@router.post("/", response_model=ConnectionResponse, status_code=201)
async def create_connection(data: ConnectionCreate, db: AsyncSession = Depends(get_db)):
    """Register a remote vault connection"""
    directory = ConnectionDirectory(db)

    if await directory.get_endpoint(data.api_name):
        raise HTTPException(
            status_code=409, detail=f"Connection {data.api_name} already exists"
        )

    return await directory.create_connection(
        data.api_name, data.base_url, data.auth_token
    )


@router.get("/{connection_id}", response_model=ConnectionResponse)
async def get_connection(connection_id: int, db: AsyncSession = Depends(get_db)):
    """Get a connection by id"""
    directory = ConnectionDirectory(db)
    connection = await directory.get(connection_id)
    if not connection:
        raise HTTPException(status_code=404, detail="Connection not found")
    return connection
