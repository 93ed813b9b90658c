import fastapi

from prepforge.utilities.messages.exceptions.http.exc_details import (
    interview_not_found_details,
    question_set_not_found_details,
    user_not_found_details,
)


async def http_404_exc_user_not_found_request(user_id: int) -> Exception:
    return fastapi.HTTPException(
        status_code=fastapi.status.HTTP_404_NOT_FOUND,
        detail=user_not_found_details(user_id=user_id),
    )


async def http_404_exc_interview_not_found_request(interview_id: int) -> Exception:
    return fastapi.HTTPException(
        status_code=fastapi.status.HTTP_404_NOT_FOUND,
        detail=interview_not_found_details(interview_id=interview_id),
    )


async def http_404_exc_question_set_not_found_request(set_id: int) -> Exception:
    return fastapi.HTTPException(
        status_code=fastapi.status.HTTP_404_NOT_FOUND,
        detail=question_set_not_found_details(set_id=set_id),
    )
