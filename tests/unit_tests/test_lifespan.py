import pytest

from prepforge.config import events
from prepforge.main import initialize_backend_application
from prepforge.services.container import ServiceContainer
from tests.unit_tests.fakes import FakeLLM


@pytest.mark.asyncio
async def test_lifespan_starts_and_stops_services(monkeypatch):
    calls = []

    async def fake_init(backend_app):
        calls.append("db-init")

    async def fake_dispose(backend_app):
        calls.append("db-dispose")

    monkeypatch.setattr(events, "initialize_db_connection", fake_init)
    monkeypatch.setattr(events, "dispose_db_connection", fake_dispose)
    services = ServiceContainer(llm=FakeLLM())
    app = initialize_backend_application(services=services)

    async with app.router.lifespan_context(app):
        assert calls == ["db-init"]
        assert services._sweep_task is not None

    assert calls == ["db-init", "db-dispose"]
    assert services._sweep_task is None
