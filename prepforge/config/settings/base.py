import logging
import pathlib

import decouple
import pydantic
from pydantic_settings import BaseSettings

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).parent.parent.parent.parent.resolve()


class BackendBaseSettings(BaseSettings):
    TITLE: str = "PrepForge Backend API"
    VERSION: str = "0.1.0"
    TIMEZONE: str = decouple.config("TIMEZONE", cast=str, default="UTC")  # type: ignore
    DESCRIPTION: str | None = None
    DEBUG: bool = False
    ENVIRONMENT: str = "DEV"  # Default environment, overridden by subclasses

    SERVER_HOST: str = decouple.config("BACKEND_SERVER_HOST", cast=str, default="127.0.0.1")  # type: ignore
    SERVER_PORT: int = decouple.config("BACKEND_SERVER_PORT", cast=int, default=8000)  # type: ignore
    SERVER_WORKERS: int = decouple.config("BACKEND_SERVER_WORKERS", cast=int, default=1)  # type: ignore
    API_PREFIX: str = "/api"
    DOCS_URL: str = "/docs"
    OPENAPI_URL: str = "/openapi.json"
    REDOC_URL: str = "/redoc"

    DB_POSTGRES_HOST: str = decouple.config("POSTGRES_HOST", cast=str, default="localhost")  # type: ignore
    DB_POSTGRES_NAME: str = decouple.config("POSTGRES_DB", cast=str, default="prepforge")  # type: ignore
    DB_POSTGRES_PASSWORD: str = decouple.config("POSTGRES_PASSWORD", cast=str, default="postgres")  # type: ignore
    DB_POOL_SIZE: int = decouple.config("DB_POOL_SIZE", cast=int, default=5)  # type: ignore
    DB_POOL_OVERFLOW: int = decouple.config("DB_POOL_OVERFLOW", cast=int, default=10)  # type: ignore
    DB_POSTGRES_PORT: int = decouple.config("POSTGRES_PORT", cast=int, default=5432)  # type: ignore
    DB_TIMEOUT: int = decouple.config("DB_TIMEOUT", cast=int, default=30)  # type: ignore
    DB_POSTGRES_USERNAME: str = decouple.config("POSTGRES_USERNAME", cast=str, default="postgres")  # type: ignore

    IS_DB_ECHO_LOG: bool = decouple.config("IS_DB_ECHO_LOG", cast=bool, default=False)  # type: ignore
    IS_DB_EXPIRE_ON_COMMIT: bool = decouple.config("IS_DB_EXPIRE_ON_COMMIT", cast=bool, default=False)  # type: ignore
    IS_DB_SSL: bool = decouple.config("IS_DB_SSL", cast=bool, default=False)  # type: ignore
    # Create missing tables on startup; schema migrations are managed outside the service
    IS_DB_CREATE_TABLES: bool = decouple.config("IS_DB_CREATE_TABLES", cast=bool, default=True)  # type: ignore

    IS_ALLOWED_CREDENTIALS: bool = decouple.config("IS_ALLOWED_CREDENTIALS", cast=bool, default=True)  # type: ignore
    FRONTEND_URL: str = decouple.config("FRONTEND_URL", cast=str, default="http://localhost:3000")  # type: ignore
    ALLOWED_ORIGINS: list[str] = [
        "http://localhost:3000",  # React default port
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite default port
        "http://127.0.0.1:5173",
    ]
    ALLOWED_METHODS: list[str] = ["*"]
    ALLOWED_HEADERS: list[str] = ["*"]

    LOGGING_LEVEL: int = logging.INFO
    LOGGERS: tuple[str, str] = ("uvicorn.asgi", "uvicorn.access")

    # ------------------------------
    # Text generation backend
    # ------------------------------
    OPENAI_MODEL: str = decouple.config("OPENAI_MODEL", cast=str, default="gpt-4o-mini")  # type: ignore
    OPENAI_API_KEY: str = decouple.config("OPENAI_API_KEY", cast=str, default="")  # type: ignore
    # Request-level cap for a single generation call; on expiry callers take their fallback path
    OPENAI_TIMEOUT_SECONDS: float = decouple.config("OPENAI_TIMEOUT_SECONDS", cast=float, default=30.0)  # type: ignore

    # ------------------------------
    # In-process caches
    # ------------------------------
    QUESTION_CACHE_TTL_SECONDS: int = decouple.config("QUESTION_CACHE_TTL_SECONDS", cast=int, default=3600)  # type: ignore
    FEEDBACK_CACHE_TTL_SECONDS: int = decouple.config("FEEDBACK_CACHE_TTL_SECONDS", cast=int, default=1800)  # type: ignore
    CACHE_SWEEP_INTERVAL_SECONDS: int = decouple.config("CACHE_SWEEP_INTERVAL_SECONDS", cast=int, default=600)  # type: ignore

    # star_method | communication
    FEEDBACK_FOURTH_AXIS: str = decouple.config("FEEDBACK_FOURTH_AXIS", cast=str, default="star_method")  # type: ignore
    PROGRESS_MAX_UPDATE_ATTEMPTS: int = decouple.config("PROGRESS_MAX_UPDATE_ATTEMPTS", cast=int, default=5)  # type: ignore

    model_config = pydantic.ConfigDict(
        case_sensitive=True,
        env_file=f"{str(ROOT_DIR)}/.env",
        validate_assignment=True,
        extra="allow",
    )

    @property
    def set_backend_app_attributes(self) -> dict[str, str | bool | None]:
        """
        Set all `FastAPI` class' attributes with the custom values defined in `BackendBaseSettings`.
        """
        return {
            "title": self.TITLE,
            "version": self.VERSION,
            "debug": self.DEBUG,
            "description": self.DESCRIPTION,
            "docs_url": self.DOCS_URL,
            "openapi_url": self.OPENAPI_URL,
            "redoc_url": self.REDOC_URL,
        }

    @property
    def is_development(self) -> bool:
        return self.DEBUG or self.ENVIRONMENT == "DEV"

    @property
    def cors_origins(self) -> list[str]:
        origins = list(self.ALLOWED_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins
