"""Database configuration and session management"""

from sqlalchemy import create_engine, event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from .config import settings


def enable_sqlite_savepoints(engine):
    """
    Let SQLite sessions use begin_nested().

    The sqlite3 driver defers BEGIN until the first write, which turns the
    first SAVEPOINT into the outer transaction and its RELEASE into a commit.
    The driver's own transaction handling is switched off and SQLAlchemy
    emits BEGIN itself.
    """
    sync_engine = getattr(engine, "sync_engine", engine)
    if sync_engine.dialect.name != "sqlite":
        return engine

    @event.listens_for(sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


database_url = settings.DATABASE_URL
if database_url.startswith("sqlite:///"):
    database_url = database_url.replace("sqlite:///", "sqlite+aiosqlite:///")

engine = enable_sqlite_savepoints(
    create_async_engine(
        database_url,
        echo=False,
        future=True,
        connect_args={"check_same_thread": False} if "sqlite" in database_url else {},
    )
)

# Scripts only
sync_database_url = database_url.replace("+aiosqlite", "")
sync_engine = enable_sqlite_savepoints(
    create_engine(
        sync_database_url,
        echo=False,
        connect_args={"check_same_thread": False} if "sqlite" in sync_database_url else {},
    )
)

AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

SessionLocal = sessionmaker(sync_engine, class_=Session, expire_on_commit=False)
Base = declarative_base()


async def get_db():
    """Request-scoped session, committed when the request succeeds"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db(bind=None):
    """
    Create missing tables on bind (the application engine by default).
    Safe to call multiple times.
    """
    # Registers every model with Base.metadata
    from .models import Connection, ExampleRecord, SettingRecord  # noqa: F401

    async with (bind if bind is not None else engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all, checkfirst=True)
