#!/usr/bin/env python3
"""
Vault Settings Startup Script
"""

import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))


async def run_server():
    """Run API server"""
    import uvicorn
    from vault_settings.config import settings

    print(f"API server starting on http://{settings.HOST}:{settings.PORT}")

    config = uvicorn.Config(
        "vault_settings.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=False,
        log_level="info",
        access_log=True,
    )
    server = uvicorn.Server(config)
    await server.serve()


async def main():
    from vault_settings.config import settings
    from vault_settings.database import init_db

    # Initialize database BEFORE starting the server
    print("Initializing database...")
    await init_db()
    print("Database initialized successfully.")

    print(f"""
      Vault Settings API:  http://{settings.HOST}:{settings.PORT}
       - API Documentation: http://{settings.HOST}:{settings.PORT}/docs
       - Remote API version: {settings.API_VERSION}

    Press CTRL+C to stop the server
    """)

    await run_server()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
