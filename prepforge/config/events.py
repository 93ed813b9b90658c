import contextlib
import logging
import typing

import fastapi

from prepforge.repository.events import dispose_db_connection, initialize_db_connection

logger = logging.getLogger(__name__)


def execute_backend_server_event_handler(backend_app: fastapi.FastAPI) -> typing.Any:
    async def launch_backend_server_events() -> None:
        await initialize_db_connection(backend_app=backend_app)
        backend_app.state.services.start()
        logger.info("Backend services started")

    return launch_backend_server_events


def terminate_backend_server_event_handler(backend_app: fastapi.FastAPI) -> typing.Any:
    async def stop_backend_server_events() -> None:
        await backend_app.state.services.stop()
        await dispose_db_connection(backend_app=backend_app)
        logger.info("Backend services stopped")

    return stop_backend_server_events


@contextlib.asynccontextmanager
async def backend_lifespan(backend_app: fastapi.FastAPI) -> typing.AsyncIterator[None]:
    await execute_backend_server_event_handler(backend_app=backend_app)()
    try:
        yield
    finally:
        await terminate_backend_server_event_handler(backend_app=backend_app)()
