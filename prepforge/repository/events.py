import logging

import fastapi
from sqlalchemy.ext.asyncio import AsyncConnection

from prepforge.config.manager import settings
from prepforge.repository.database import async_db
from prepforge.repository.table import Base

logger = logging.getLogger(__name__)


async def initialize_db_tables(connection: AsyncConnection) -> None:
    logger.info("Database Table Creation --- Initializing . . .")

    # Registers every mapped class on the metadata before create_all
    import prepforge.models.db  # noqa: F401

    await connection.run_sync(Base.metadata.create_all)

    logger.info("Database Table Creation --- Successfully Initialized!")


async def initialize_db_connection(backend_app: fastapi.FastAPI) -> None:
    logger.info("Database Connection --- Establishing . . .")

    backend_app.state.db = async_db

    if settings.IS_DB_CREATE_TABLES:
        async with backend_app.state.db.async_engine.begin() as connection:
            await initialize_db_tables(connection=connection)

    logger.info("Database Connection --- Successfully Established!")


async def dispose_db_connection(backend_app: fastapi.FastAPI) -> None:
    logger.info("Database Connection --- Disposing . . .")

    await backend_app.state.db.async_engine.dispose()

    logger.info("Database Connection --- Successfully Disposed!")
