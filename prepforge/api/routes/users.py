import fastapi

from prepforge.api.dependencies.repository import get_repository
from prepforge.models.schemas.base import SuccessResponse
from prepforge.models.schemas.user import UserOut, UserUpsert
from prepforge.repository.crud.user import UserCRUDRepository
from prepforge.utilities.exceptions.database import EntityDoesNotExist
from prepforge.utilities.exceptions.http.exc_404 import http_404_exc_user_not_found_request

router = fastapi.APIRouter(prefix="", tags=["users"])


@router.post(
    path="/users",
    name="users:create-or-update",
    response_model=SuccessResponse[UserOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def create_or_update_user(
    payload: UserUpsert,
    user_repo: UserCRUDRepository = fastapi.Depends(get_repository(repo_type=UserCRUDRepository)),
) -> SuccessResponse[UserOut]:
    user = await user_repo.create_or_update_user(email=payload.email, name=payload.name, google_id=payload.google_id)
    return SuccessResponse(data=UserOut.model_validate(user))


@router.get(
    path="/users/{user_id}",
    name="users:get",
    response_model=SuccessResponse[UserOut],
    status_code=fastapi.status.HTTP_200_OK,
)
async def get_user(
    user_id: int,
    user_repo: UserCRUDRepository = fastapi.Depends(get_repository(repo_type=UserCRUDRepository)),
) -> SuccessResponse[UserOut]:
    try:
        user = await user_repo.get_user_by_id(user_id=user_id)
    except EntityDoesNotExist:
        raise await http_404_exc_user_not_found_request(user_id=user_id)
    return SuccessResponse(data=UserOut.model_validate(user))
