"""Example record API routes"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..exceptions import SettingsError
from ..models.example_record import ExampleRecord
from ..schemas.example import (
    ExampleRecordCreate,
    ExampleRecordResponse,
    ExampleRecordUpdate,
)
from ..services.connection_directory import ConnectionDirectory
from ..services.example_trigger import ExampleRecordTrigger
from ..services.log_service import log_service
from .deps import get_example_trigger

router = APIRouter(prefix="/api/examples", tags=["examples"])


async def _check_connection(db: AsyncSession, connection_id):
    if connection_id is None:
        return
    if not await ConnectionDirectory(db).get(connection_id):
        raise HTTPException(status_code=400, detail="Connection not found")


async def _run_trigger(
    db: AsyncSession, trigger: ExampleRecordTrigger, record: ExampleRecord
):
    try:
        await trigger.execute(record)
    except SettingsError as e:
        log_service.error(f"Example trigger failed for {record.name}: {e}")
        # Drops the record changes along with any settings the trigger wrote
        await db.rollback()
        raise HTTPException(status_code=500, detail=f"Trigger failed: {str(e)}")


@router.post("/", response_model=ExampleRecordResponse, status_code=201)
async def create_example(
    data: ExampleRecordCreate,
    db: AsyncSession = Depends(get_db),
    trigger: ExampleRecordTrigger = Depends(get_example_trigger),
):
    """Create an example record (trigger runs before insert)"""
    await _check_connection(db, data.remote_connection_id)

    record = ExampleRecord(
        name=data.name, remote_connection_id=data.remote_connection_id
    )
    await _run_trigger(db, trigger, record)

    db.add(record)
    await db.commit()
    await db.refresh(record)
    return record


@router.get("/{record_id}", response_model=ExampleRecordResponse)
async def get_example(record_id: int, db: AsyncSession = Depends(get_db)):
    """Get an example record"""
    record = await db.get(ExampleRecord, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")
    return record


@router.put("/{record_id}", response_model=ExampleRecordResponse)
async def update_example(
    record_id: int,
    data: ExampleRecordUpdate,
    db: AsyncSession = Depends(get_db),
    trigger: ExampleRecordTrigger = Depends(get_example_trigger),
):
    """Update an example record (trigger runs before update)"""
    record = await db.get(ExampleRecord, record_id)
    if not record:
        raise HTTPException(status_code=404, detail="Record not found")

    changes = data.model_dump(exclude_unset=True)
    if "remote_connection_id" in changes:
        await _check_connection(db, changes["remote_connection_id"])
    if changes.get("name") is None:
        changes.pop("name", None)
    for field, value in changes.items():
        setattr(record, field, value)

    await _run_trigger(db, trigger, record)

    await db.commit()
    await db.refresh(record)
    return record
