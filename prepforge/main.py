import logging

import fastapi
import uvicorn
from dotenv import load_dotenv
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from prepforge.api.endpoints import router as api_endpoint_router
from prepforge.config.events import backend_lifespan
from prepforge.config.manager import settings
from prepforge.services.container import ServiceContainer

logger = logging.getLogger(__name__)


def _validation_details(exc: RequestValidationError) -> list[dict[str, str]]:
    details = []
    for error in exc.errors():
        # Drop the request-part prefix ("body", "query", "path")
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        details.append({"field": ".".join(loc) or "body", "message": error.get("msg", "Invalid value")})
    return details


def register_exception_handlers(app: fastapi.FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: fastapi.Request, exc: RequestValidationError):
        return fastapi.responses.JSONResponse(
            status_code=fastapi.status.HTTP_400_BAD_REQUEST,
            content={"success": False, "error": "Validation failed", "details": _validation_details(exc)},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: fastapi.Request, exc: StarletteHTTPException):
        return fastapi.responses.JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: fastapi.Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if settings.is_development else "Something went wrong"
        return fastapi.responses.JSONResponse(
            status_code=fastapi.status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": "Internal server error", "message": message},
        )


def initialize_backend_application(services: ServiceContainer | None = None) -> fastapi.FastAPI:
    # Load environment variables from .env if present
    load_dotenv()
    logging.basicConfig(
        level=settings.LOGGING_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = fastapi.FastAPI(**settings.set_backend_app_attributes, lifespan=backend_lifespan)  # type: ignore

    # Tags metadata for Swagger grouping
    app.openapi_tags = [  # type: ignore[attr-defined]
        {"name": "users", "description": "User creation and lookup."},
        {"name": "interviews", "description": "Question generation, answer scoring, follow-ups and interview status."},
        {"name": "history", "description": "Progress, interview history, analytics and timer configuration."},
        {"name": "bookmarks", "description": "Saved question sets."},
    ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.IS_ALLOWED_CREDENTIALS,
        allow_methods=settings.ALLOWED_METHODS,
        allow_headers=settings.ALLOWED_HEADERS,
    )

    register_exception_handlers(app)

    # One container per application; the lifespan starts and stops it
    app.state.services = services or ServiceContainer()

    app.include_router(router=api_endpoint_router, prefix=settings.API_PREFIX)

    @app.get("/")
    async def root():
        return {
            "success": True,
            "data": {
                "message": "Welcome to PrepForge Backend API",
                "version": settings.VERSION,
                "docs": settings.DOCS_URL,
                "health": f"{settings.API_PREFIX}/health",
            },
        }

    return app


backend_app: fastapi.FastAPI = initialize_backend_application()

if __name__ == "__main__":
    uvicorn.run(
        app="prepforge.main:backend_app",
        host=settings.SERVER_HOST,
        port=settings.SERVER_PORT,
        reload=settings.DEBUG,
        workers=settings.SERVER_WORKERS,
        log_level=settings.LOGGING_LEVEL,
    )
