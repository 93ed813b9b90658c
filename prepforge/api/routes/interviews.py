import logging

import fastapi

from prepforge.api.dependencies.repository import get_repository
from prepforge.api.dependencies.services import (
    get_feedback_normalizer,
    get_follow_up_generator,
    get_progress_aggregator,
    get_question_generator,
)
from prepforge.models.schemas.answer import (
    AnswerOut,
    FeedbackData,
    FollowUpData,
    FollowUpRequest,
    GenerateFeedbackRequest,
)
from prepforge.models.schemas.base import SuccessResponse
from prepforge.models.schemas.interview import (
    GeneratedQuestionsData,
    GenerateQuestionsRequest,
    InterviewOut,
    InterviewStatusUpdate,
)
from prepforge.repository.crud.answer import AnswerCRUDRepository
from prepforge.repository.crud.interview import InterviewCRUDRepository
from prepforge.services.feedback import FeedbackNormalizer
from prepforge.services.follow_up import FollowUpGenerator
from prepforge.services.progress import ProgressAggregator
from prepforge.services.question_generator import QuestionGenerator
from prepforge.services.timer import calculate_time_score, get_recommended_time
from prepforge.utilities.exceptions.http.exc_400 import http_400_exc_bad_status_request
from prepforge.utilities.exceptions.http.exc_404 import http_404_exc_interview_not_found_request

logger = logging.getLogger(__name__)

router = fastapi.APIRouter(prefix="", tags=["interviews"])


@router.post(
    path="/generate-questions",
    name="interviews:generate-questions",
    response_model=SuccessResponse[GeneratedQuestionsData],
    status_code=fastapi.status.HTTP_200_OK,
    summary="Generate interview questions",
    description=(
        "Generates questions for a role and company. Falls back to the built-in question bank when generation is "
        "unavailable. When userId is given the questions are saved as a new interview; if saving fails the questions "
        "are still returned with saved=false and offline=true."
    ),
)
async def generate_questions(
    payload: GenerateQuestionsRequest,
    generator: QuestionGenerator = fastapi.Depends(get_question_generator),
    interview_repo: InterviewCRUDRepository = fastapi.Depends(get_repository(repo_type=InterviewCRUDRepository)),
    aggregator: ProgressAggregator = fastapi.Depends(get_progress_aggregator),
) -> SuccessResponse[GeneratedQuestionsData]:
    questions, is_fallback = await generator.generate(
        role=payload.job_role,
        company=payload.company,
        experience=payload.experience,
        difficulty=payload.difficulty,
        count=payload.number_of_questions,
        question_type=payload.question_type,
    )

    if payload.user_id is None:
        return SuccessResponse(
            data=GeneratedQuestionsData(
                questions=questions,
                saved=False,
                offline=False,
                is_fallback=is_fallback,
                message="Questions generated. Provide userId to save them as an interview.",
            )
        )

    try:
        interview = await interview_repo.create_interview(
            user_id=payload.user_id,
            job_role=payload.job_role,
            company=payload.company,
            experience=payload.experience,
            difficulty=payload.difficulty,
            questions=questions,
        )
    except Exception as e:  # noqa: BLE001
        logger.warning("Could not save interview for user %s, returning questions unsaved: %s", payload.user_id, e)
        return SuccessResponse(
            data=GeneratedQuestionsData(
                questions=questions,
                saved=False,
                offline=True,
                is_fallback=is_fallback,
                message="Questions generated but could not be saved. Progress will not be tracked for this session.",
            )
        )

    logger.info("Saved interview %s with %s questions for user %s", interview.id, len(questions), payload.user_id)
    try:
        await aggregator.record_interview_started(user_id=payload.user_id)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to count interview %s in progress for user %s", interview.id, payload.user_id)

    return SuccessResponse(
        data=GeneratedQuestionsData(
            questions=questions,
            interview_id=interview.id,
            saved=True,
            offline=False,
            is_fallback=is_fallback,
            message="Questions generated and saved.",
        )
    )


@router.post(
    path="/generate-feedback",
    name="interviews:generate-feedback",
    response_model=SuccessResponse[FeedbackData],
    status_code=fastapi.status.HTTP_200_OK,
    summary="Score an answer and record progress",
)
async def generate_feedback(
    payload: GenerateFeedbackRequest,
    normalizer: FeedbackNormalizer = fastapi.Depends(get_feedback_normalizer),
    interview_repo: InterviewCRUDRepository = fastapi.Depends(get_repository(repo_type=InterviewCRUDRepository)),
    answer_repo: AnswerCRUDRepository = fastapi.Depends(get_repository(repo_type=AnswerCRUDRepository)),
    aggregator: ProgressAggregator = fastapi.Depends(get_progress_aggregator),
) -> SuccessResponse[FeedbackData]:
    interview = await interview_repo.get_by_id_and_user(interview_id=payload.interview_id, user_id=payload.user_id)
    if interview is None:
        raise await http_404_exc_interview_not_found_request(interview_id=payload.interview_id)
    question_entry = next((q for q in interview.questions or [] if str(q.get("id")) == payload.question_id), None)
    if question_entry is None:
        raise fastapi.HTTPException(
            status_code=fastapi.status.HTTP_404_NOT_FOUND,
            detail=f"Question `{payload.question_id}` not found in interview `{payload.interview_id}`",
        )

    record = await normalizer.evaluate(payload.question, payload.answer)

    fourth_column = "star_method_score" if normalizer.fourth_axis == "star_method" else "communication_score"
    fields = {
        "user_id": payload.user_id,
        "interview_id": payload.interview_id,
        "question_id": payload.question_id,
        "question": payload.question,
        "answer": payload.answer,
        "relevance_score": record.relevance,
        "clarity_score": record.clarity,
        "depth_score": record.depth,
        fourth_column: record.fourth_axis,
        "strengths": [record.overall_feedback],
        "improvements": [record.suggestion],
        "time_spent": payload.time_spent,
    }
    try:
        answer = await answer_repo.create_answer(fields=fields)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to save answer for interview %s", payload.interview_id)
        raise fastapi.HTTPException(
            status_code=fastapi.status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save answer"
        )
    logger.info(
        "Saved answer %s (attempt %s) for interview %s question %s",
        answer.id,
        answer.attempt_number,
        payload.interview_id,
        payload.question_id,
    )

    progress_updated = True
    try:
        await aggregator.record_answer(
            user_id=payload.user_id,
            scores={
                "relevance": record.relevance,
                "clarity": record.clarity,
                "depth": record.depth,
                "fourth_axis": record.fourth_axis,
            },
            practiced_at=answer.created_at,
            question_type=question_entry.get("type"),
        )
    except Exception:  # noqa: BLE001
        # The answer stands; POST /user-stats/{userId}/reconcile rebuilds the aggregate
        logger.exception("Failed to update progress for user %s after answer %s", payload.user_id, answer.id)
        progress_updated = False

    time_score = None
    if payload.time_spent is not None:
        time_score = calculate_time_score(
            payload.time_spent, get_recommended_time(question_entry.get("difficulty") or interview.difficulty)
        )

    return SuccessResponse(
        data=FeedbackData(
            feedback=AnswerOut.model_validate(answer),
            overall_feedback=record.overall_feedback,
            suggestion=record.suggestion,
            is_fallback=record.is_fallback,
            time_score=time_score,
            progress_updated=progress_updated,
        )
    )


@router.post(
    path="/generate-follow-up",
    name="interviews:generate-follow-up",
    response_model=SuccessResponse[FollowUpData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def generate_follow_up(
    payload: FollowUpRequest,
    follow_up_generator: FollowUpGenerator = fastapi.Depends(get_follow_up_generator),
) -> SuccessResponse[FollowUpData]:
    text = await follow_up_generator.generate(payload.question, payload.answer)
    return SuccessResponse(data=FollowUpData(follow_up_question=text))


async def _close_interview(
    *,
    interview_id: int,
    payload: InterviewStatusUpdate,
    status: str,
    interview_repo: InterviewCRUDRepository,
) -> InterviewOut:
    interview = await interview_repo.get_by_id_and_user(interview_id=interview_id, user_id=payload.user_id)
    if interview is None:
        raise await http_404_exc_interview_not_found_request(interview_id=interview_id)
    if interview.status != "in_progress":
        raise await http_400_exc_bad_status_request(status=interview.status)
    interview = await interview_repo.update_status(interview_id=interview_id, status=status, duration=payload.duration)
    logger.info("Interview %s marked %s", interview_id, status)
    return InterviewOut.model_validate(interview)


@router.post(
    path="/interviews/{interview_id}/complete",
    name="interviews:complete",
    response_model=SuccessResponse[InterviewOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def complete_interview(
    interview_id: int,
    payload: InterviewStatusUpdate,
    interview_repo: InterviewCRUDRepository = fastapi.Depends(get_repository(repo_type=InterviewCRUDRepository)),
    aggregator: ProgressAggregator = fastapi.Depends(get_progress_aggregator),
) -> SuccessResponse[InterviewOut]:
    interview = await _close_interview(
        interview_id=interview_id, payload=payload, status="completed", interview_repo=interview_repo
    )
    try:
        await aggregator.record_interview_completed(user_id=payload.user_id)
    except Exception:  # noqa: BLE001
        logger.exception("Failed to count completed interview %s for user %s", interview_id, payload.user_id)
    return SuccessResponse(data=interview)


@router.post(
    path="/interviews/{interview_id}/abandon",
    name="interviews:abandon",
    response_model=SuccessResponse[InterviewOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def abandon_interview(
    interview_id: int,
    payload: InterviewStatusUpdate,
    interview_repo: InterviewCRUDRepository = fastapi.Depends(get_repository(repo_type=InterviewCRUDRepository)),
) -> SuccessResponse[InterviewOut]:
    interview = await _close_interview(
        interview_id=interview_id, payload=payload, status="abandoned", interview_repo=interview_repo
    )
    return SuccessResponse(data=interview)
