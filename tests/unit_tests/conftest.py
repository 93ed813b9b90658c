import httpx
import pytest
import pytest_asyncio

from prepforge.api.dependencies.repository import get_repository
from prepforge.main import initialize_backend_application
from prepforge.repository.crud.answer import AnswerCRUDRepository
from prepforge.repository.crud.interview import InterviewCRUDRepository
from prepforge.repository.crud.saved_question_set import SavedQuestionSetCRUDRepository
from prepforge.repository.crud.user import UserCRUDRepository
from prepforge.repository.crud.user_progress import UserProgressCRUDRepository
from prepforge.services.container import ServiceContainer
from tests.unit_tests.fakes import (
    FakeAnswerRepo,
    FakeInterviewRepo,
    FakeLLM,
    FakeProgressRepo,
    FakeSetRepo,
    FakeStore,
    FakeUserRepo,
)


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def fake_llm() -> FakeLLM:
    return FakeLLM()


@pytest.fixture
def app(store, fake_llm):
    app = initialize_backend_application(services=ServiceContainer(llm=fake_llm))
    app.dependency_overrides[get_repository(repo_type=UserCRUDRepository)] = lambda: FakeUserRepo(store)
    app.dependency_overrides[get_repository(repo_type=InterviewCRUDRepository)] = lambda: FakeInterviewRepo(store)
    app.dependency_overrides[get_repository(repo_type=AnswerCRUDRepository)] = lambda: FakeAnswerRepo(store)
    app.dependency_overrides[get_repository(repo_type=UserProgressCRUDRepository)] = lambda: FakeProgressRepo(store)
    app.dependency_overrides[get_repository(repo_type=SavedQuestionSetCRUDRepository)] = lambda: FakeSetRepo(store)
    return app


@pytest_asyncio.fixture
async def client(app):
    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://testserver") as c:
        yield c
