import fastapi

from prepforge.api.dependencies.repository import get_repository
from prepforge.api.dependencies.services import get_history_service, get_progress_aggregator
from prepforge.models.schemas.answer import AnswerOut
from prepforge.models.schemas.base import SuccessResponse
from prepforge.models.schemas.interview import InterviewOut
from prepforge.models.schemas.progress import (
    AnalyticsData,
    InterviewDetailsData,
    InterviewHistoryData,
    ProgressOut,
    SkillBreakdownData,
    TimerConfigData,
    UserStatsData,
)
from prepforge.repository.crud.user import UserCRUDRepository
from prepforge.services.history import HistoryService
from prepforge.services.progress import ProgressAggregator
from prepforge.services.timer import get_timer_config
from prepforge.utilities.exceptions.database import EntityDoesNotExist
from prepforge.utilities.exceptions.http.exc_404 import (
    http_404_exc_interview_not_found_request,
    http_404_exc_user_not_found_request,
)

router = fastapi.APIRouter(prefix="", tags=["history"])


@router.get(
    path="/user-stats/{user_id}",
    name="history:user-stats",
    response_model=SuccessResponse[UserStatsData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_user_stats(
    user_id: int,
    history: HistoryService = fastapi.Depends(get_history_service),
) -> SuccessResponse[UserStatsData]:
    stats = await history.get_user_stats(user_id=user_id)
    return SuccessResponse(data=UserStatsData.model_validate(stats))


@router.post(
    path="/user-stats/{user_id}/reconcile",
    name="history:reconcile",
    response_model=SuccessResponse[ProgressOut],
    status_code=fastapi.status.HTTP_200_OK,
    summary="Rebuild the progress aggregate from the answer history",
)
async def reconcile_user_stats(
    user_id: int,
    user_repo: UserCRUDRepository = fastapi.Depends(get_repository(repo_type=UserCRUDRepository)),
    aggregator: ProgressAggregator = fastapi.Depends(get_progress_aggregator),
) -> SuccessResponse[ProgressOut]:
    try:
        await user_repo.get_user_by_id(user_id=user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_user_not_found_request(user_id=user_id)
    snapshot = await aggregator.reconcile(user_id=user_id)
    return SuccessResponse(data=ProgressOut.model_validate(snapshot))


@router.get(
    path="/interview-history/{user_id}",
    name="history:interview-history",
    response_model=SuccessResponse[InterviewHistoryData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_interview_history(
    user_id: int,
    page: int = fastapi.Query(default=1, ge=1),
    limit: int = fastapi.Query(default=10, ge=1, le=50),
    history: HistoryService = fastapi.Depends(get_history_service),
) -> SuccessResponse[InterviewHistoryData]:
    result = await history.get_interview_history(user_id=user_id, page=page, limit=limit)
    return SuccessResponse(data=InterviewHistoryData.model_validate(result))


@router.get(
    path="/interview-details/{interview_id}",
    name="history:interview-details",
    response_model=SuccessResponse[InterviewDetailsData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_interview_details(
    interview_id: int,
    user_id: int | None = fastapi.Query(default=None, alias="userId"),
    history: HistoryService = fastapi.Depends(get_history_service),
) -> SuccessResponse[InterviewDetailsData]:
    try:
        details = await history.get_interview_details(interview_id=interview_id, user_id=user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_interview_not_found_request(interview_id=interview_id)
    return SuccessResponse(
        data=InterviewDetailsData(
            interview=InterviewOut.model_validate(details["interview"]),
            answers=[AnswerOut.model_validate(answer) for answer in details["answers"]],
        )
    )


@router.get(
    path="/analytics/{user_id}",
    name="history:analytics",
    response_model=SuccessResponse[AnalyticsData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_analytics(
    user_id: int,
    days: int = fastapi.Query(default=30, ge=1, le=365),
    history: HistoryService = fastapi.Depends(get_history_service),
) -> SuccessResponse[AnalyticsData]:
    analytics = await history.get_analytics(user_id=user_id, days=days)
    return SuccessResponse(data=AnalyticsData.model_validate(analytics))


@router.get(
    path="/skills/{user_id}",
    name="history:skills",
    response_model=SuccessResponse[SkillBreakdownData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_skill_breakdown(
    user_id: int,
    history: HistoryService = fastapi.Depends(get_history_service),
) -> SuccessResponse[SkillBreakdownData]:
    breakdown = await history.get_skill_breakdown(user_id=user_id)
    return SuccessResponse(data=SkillBreakdownData.model_validate(breakdown))


@router.get(
    path="/timer-config",
    name="history:timer-config",
    response_model=SuccessResponse[TimerConfigData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def timer_config() -> SuccessResponse[TimerConfigData]:
    return SuccessResponse(data=TimerConfigData.model_validate(get_timer_config()))
