# ezgest/config/environments/base.py
import pathlib
from decouple import config
from pydantic_settings import BaseSettings
from typing import List, Optional

ROOT_DIR: pathlib.Path = pathlib.Path(__file__).parent.parent.parent.parent.resolve()


class BackendBaseSettings(BaseSettings):
    """
    Base settings shared by every environment.
    Environment-specific classes override only what differs.
    """

    # Application Metadata
    TITLE: str = "EzGest API"
    VERSION: str = "1.0.0"
    DESCRIPTION: Optional[str] = "Multi-tenant point-of-sale administration backend"
    DEBUG: bool = config("DEBUG", default=False, cast=bool)

    # Server Configuration
    SERVER_HOST: str = config("API_HOST", default="0.0.0.0", cast=str)
    SERVER_PORT: int = config("API_PORT", default=8000, cast=int)
    API_PREFIX: str = "/api"
    DOCS_URL: str = "/docs"
    OPENAPI_URL: str = "/openapi.json"
    REDOC_URL: str = "/redoc"

    # MongoDB Configuration
    MONGODB_URI: str = config("MONGODB_URI", default="mongodb://localhost:27017")
    DATABASE_NAME: str = config("DATABASE_NAME", default="EzGest")
    MONGODB_TIMEOUT_MS: int = config("MONGODB_TIMEOUT_MS", default=5000, cast=int)
    MONGODB_MAX_POOL_SIZE: int = config("MONGODB_MAX_POOL_SIZE", default=50, cast=int)
    MONGODB_MIN_POOL_SIZE: int = config("MONGODB_MIN_POOL_SIZE", default=5, cast=int)

    # JWT Configuration
    JWT_SECRET_KEY: str = config("JWT_SECRET_KEY")
    JWT_ALGORITHM: str = config("JWT_ALGORITHM", default="HS256")
    TOKEN_TTL_MS: int = config("TOKEN_TTL_MS", default=86_400_000, cast=int)

    # Credentials
    PASSWORD_MIN_LENGTH: int = config("PASSWORD_MIN_LENGTH", default=6, cast=int)
    SALT_BYTES: int = config("SALT_BYTES", default=16, cast=int)

    # Tenants
    INVITE_CODE_LENGTH: int = config("INVITE_CODE_LENGTH", default=6, cast=int)
    INVITE_CODE_ATTEMPTS: int = config("INVITE_CODE_ATTEMPTS", default=5, cast=int)

    # Routes reachable without a token
    PUBLIC_PATHS: List[str] = [
        "/api/login",
        "/api/register",
        "/health",
        "/health/",
        "/health/ready",
        "/",
    ]

    # CORS Configuration
    CORS_ORIGINS: list = ["*"]
    CORS_ALLOW_CREDENTIALS: bool = False
    CORS_ALLOW_METHODS: list = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_ALLOW_HEADERS: list = ["Content-Type", "Authorization"]

    # Logging Configuration
    LOG_LEVEL: str = config("LOG_LEVEL", default="INFO")
    LOG_TO_FILE: bool = config("LOG_TO_FILE", default=True, cast=bool)
    LOG_DIR: str = config("LOG_DIR", default="logs")

    # API Configuration
    API_TITLE: str = TITLE
    API_DESCRIPTION: str = DESCRIPTION or "Multi-tenant point-of-sale administration backend"
    API_VERSION: str = VERSION

    class Config:
        case_sensitive: bool = True
        env_file: str = f"{str(ROOT_DIR)}/.env"
        env_file_encoding: str = "utf-8"
        validate_assignment: bool = True
        extra: str = "ignore"

