import fastapi

from prepforge.api.dependencies.repository import get_repository
from prepforge.config.manager import settings
from prepforge.repository.crud.answer import AnswerCRUDRepository
from prepforge.repository.crud.interview import InterviewCRUDRepository
from prepforge.repository.crud.user_progress import UserProgressCRUDRepository
from prepforge.services.container import ServiceContainer
from prepforge.services.feedback import FeedbackNormalizer
from prepforge.services.follow_up import FollowUpGenerator
from prepforge.services.history import HistoryService
from prepforge.services.progress import ProgressAggregator
from prepforge.services.question_generator import QuestionGenerator


def get_services(request: fastapi.Request) -> ServiceContainer:
    return request.app.state.services


def get_question_generator(services: ServiceContainer = fastapi.Depends(get_services)) -> QuestionGenerator:
    return services.question_generator


def get_feedback_normalizer(services: ServiceContainer = fastapi.Depends(get_services)) -> FeedbackNormalizer:
    return services.feedback_normalizer


def get_follow_up_generator(services: ServiceContainer = fastapi.Depends(get_services)) -> FollowUpGenerator:
    return services.follow_up_generator


def get_progress_aggregator(
    progress_repo: UserProgressCRUDRepository = fastapi.Depends(get_repository(repo_type=UserProgressCRUDRepository)),
    answer_repo: AnswerCRUDRepository = fastapi.Depends(get_repository(repo_type=AnswerCRUDRepository)),
) -> ProgressAggregator:
    return ProgressAggregator(progress_repo=progress_repo, answer_repo=answer_repo)


def get_history_service(
    interview_repo: InterviewCRUDRepository = fastapi.Depends(get_repository(repo_type=InterviewCRUDRepository)),
    answer_repo: AnswerCRUDRepository = fastapi.Depends(get_repository(repo_type=AnswerCRUDRepository)),
    progress_repo: UserProgressCRUDRepository = fastapi.Depends(get_repository(repo_type=UserProgressCRUDRepository)),
) -> HistoryService:
    return HistoryService(
        interview_repo=interview_repo,
        answer_repo=answer_repo,
        progress_repo=progress_repo,
        fourth_axis=settings.FEEDBACK_FOURTH_AXIS,
    )
