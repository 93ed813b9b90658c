import fastapi

from prepforge.utilities.messages.exceptions.http.exc_details import http_400_invalid_status_details


async def http_400_exc_bad_status_request(status: str) -> Exception:
    return fastapi.HTTPException(
        status_code=fastapi.status.HTTP_400_BAD_REQUEST,
        detail=http_400_invalid_status_details(status=status),
    )
