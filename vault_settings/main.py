"""Main FastAPI application"""

import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api import connections, examples, system
from .api import settings as settings_api
from .config import settings
from .database import engine, init_db
from .services.log_service import log_service


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    # Startup
    await init_db()
    log_service.info("Vault settings service started")
    try:
        yield
    except asyncio.CancelledError:
        pass  # Suppress CancelledError during shutdown
    finally:
        await engine.dispose()


app = FastAPI(
    title="Vault Settings",
    description="Typed settings stored as JSON in a local table and on remote vaults",
    version="1.0.0",
    lifespan=lifespan,
)

# Add CORS middleware
# If ALLOWED_ORIGINS is not set, default to ["*"]
allowed_origins = ["*"]
allow_credentials = False  # Credentials cannot be used with "*"

if settings.ALLOWED_ORIGINS:
    allowed_origins = settings.ALLOWED_ORIGINS.split(",")
    allow_credentials = True

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=allow_credentials,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routers
app.include_router(settings_api.router)
app.include_router(connections.router)
app.include_router(examples.router)
app.include_router(system.router)


# Root API endpoint
@app.get("/api")
async def api_root():
    """API root"""
    return {
        "name": "Vault Settings API",
        "version": "1.0.0",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }
