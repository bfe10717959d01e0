"""System API routes (status, logs)"""

from fastapi import APIRouter, HTTPException, Query
from fastapi.responses import FileResponse

from ..config import settings as app_settings
from ..services.log_service import LOG_TYPE_PATTERN, log_service

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/status")
async def system_status():
    """Basic system status check"""
    return {
        "status": "ok",
        "version": "1.0.0",
        "api_version": app_settings.API_VERSION,
        "data_dir": str(app_settings.DATA_DIR),
        "logs_dir": str(app_settings.LOGS_DIR),
    }


@router.get("/logs")
async def get_logs(
    type: str = Query("error", pattern=LOG_TYPE_PATTERN),
    limit: int = Query(100, ge=1, le=1000),
):
    """Get recent log entries"""
    logs = log_service.get_logs(type, limit)
    return {"log_type": type, "lines": logs, "count": len(logs)}


@router.get("/logs/download")
async def download_logs(type: str = Query("error", pattern=LOG_TYPE_PATTERN)):
    """Download full log file"""
    log_file = log_service.get_log_file_path(type)

    if not log_file.exists():
        raise HTTPException(status_code=404, detail="Log file not found")

    return FileResponse(path=log_file, filename=f"{type}.log", media_type="text/plain")
