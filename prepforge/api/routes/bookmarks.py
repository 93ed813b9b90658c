import logging

import fastapi

from prepforge.api.dependencies.repository import get_repository
from prepforge.models.schemas.base import SuccessResponse
from prepforge.models.schemas.bookmark import (
    DeletedData,
    QuestionSetListData,
    QuestionSetOut,
    QuestionSetOwner,
    SaveQuestionSetRequest,
    TagListData,
)
from prepforge.repository.crud.saved_question_set import SavedQuestionSetCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist
from prepforge.utilities.exceptions.http.exc_404 import http_404_exc_question_set_not_found_request

logger = logging.getLogger(__name__)

router = fastapi.APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.post(
    path="/save",
    name="bookmarks:save",
    response_model=SuccessResponse[QuestionSetOut],
    status_code=fastapi.status.HTTP_201_CREATED,
)
async def save_question_set(
    payload: SaveQuestionSetRequest,
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[QuestionSetOut]:
    question_set = await set_repo.create_set(
        user_id=payload.user_id,
        title=payload.title,
        questions=payload.questions,
        description=payload.description,
        tags=payload.tags,
        interview_id=payload.interview_id,
    )
    logger.info("Saved question set %s for user %s", question_set.id, payload.user_id)
    return SuccessResponse(data=QuestionSetOut.model_validate(question_set))


@router.get(
    path="/user/{user_id}",
    name="bookmarks:list",
    response_model=SuccessResponse[QuestionSetListData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def list_question_sets(
    user_id: int,
    tag: str | None = fastapi.Query(default=None),
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[QuestionSetListData]:
    items = await set_repo.list_by_user(user_id=user_id, tag=tag)
    return SuccessResponse(
        data=QuestionSetListData(items=[QuestionSetOut.model_validate(item) for item in items], count=len(items))
    )


@router.get(
    path="/user/{user_id}/tags",
    name="bookmarks:tags",
    response_model=SuccessResponse[TagListData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def list_tags(
    user_id: int,
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[TagListData]:
    return SuccessResponse(data=TagListData(tags=await set_repo.list_tags(user_id=user_id)))


@router.patch(
    path="/{set_id}/favorite",
    name="bookmarks:toggle-favorite",
    response_model=SuccessResponse[QuestionSetOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def toggle_favorite(
    set_id: int,
    payload: QuestionSetOwner,
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[QuestionSetOut]:
    try:
        question_set = await set_repo.toggle_favorite(set_id=set_id, user_id=payload.user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_question_set_not_found_request(set_id=set_id)
    return SuccessResponse(data=QuestionSetOut.model_validate(question_set))


@router.post(
    path="/{set_id}/practice",
    name="bookmarks:practice",
    response_model=SuccessResponse[QuestionSetOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def record_practice(
    set_id: int,
    payload: QuestionSetOwner,
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[QuestionSetOut]:
    try:
        question_set = await set_repo.increment_practice(set_id=set_id, user_id=payload.user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_question_set_not_found_request(set_id=set_id)
    return SuccessResponse(data=QuestionSetOut.model_validate(question_set))


@router.delete(
    path="/{set_id}",
    name="bookmarks:delete",
    response_model=SuccessResponse[DeletedData],
    status_code=fastapi.status.HTTP_200_OK,
)
async def delete_question_set(
    set_id: int,
    payload: QuestionSetOwner,
    set_repo: SavedQuestionSetCRUDRepository = fastapi.Depends(get_repository(repo_type=SavedQuestionSetCRUDRepository)),
) -> SuccessResponse[DeletedData]:
    try:
        await set_repo.delete_set(set_id=set_id, user_id=payload.user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_question_set_not_found_request(set_id=set_id)
    logger.info("Deleted question set %s for user %s", set_id, payload.user_id)
    return SuccessResponse(data=DeletedData())
