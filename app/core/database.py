from sqlmodel import SQLModel
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker
from app.core.config import settings
import logging
from sqlalchemy import event

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> AsyncEngine:
    engine_kwargs = {
        "echo": settings.log_level == "DEBUG",
        "future": True,
    }
    # SQLite engines use a static/file pool that rejects sizing arguments
    if not database_url.startswith("sqlite"):
        engine_kwargs["pool_size"] = settings.db_pool_size
        engine_kwargs["max_overflow"] = settings.db_max_overflow
    return create_async_engine(database_url, **engine_kwargs)


def build_session_maker(bind: AsyncEngine) -> sessionmaker:
    return sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


engine: AsyncEngine = build_engine(settings.database_url)

if settings.is_postgres:
    # Set search_path to the schema from settings after connecting
    @event.listens_for(engine.sync_engine, "connect")
    def set_search_path(dbapi_connection, connection_record):
        logger.info("Setting search path to %s", settings.db_schema)
        cursor = dbapi_connection.cursor()
        cursor.execute(f"SET search_path TO {settings.db_schema}")
        cursor.close()

async_session_maker = build_session_maker(engine)


async def create_db_and_tables(bind: AsyncEngine = engine):
    logger.info("Creating database tables")
    async with bind.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)


async def close_db():
    await engine.dispose()
