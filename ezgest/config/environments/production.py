# ezgest/config/environments/production.py
from ezgest.config.environments.base import BackendBaseSettings
from ezgest.config.environments.environment import Environment


class BackendProdSettings(BackendBaseSettings):
    """Production-specific settings"""
    DESCRIPTION: str | None = "Production Environment - EzGest API"
    DEBUG: bool = False
    ENVIRONMENT: Environment = Environment.PRODUCTION

    LOG_LEVEL: str = "WARNING"
    DOCS_URL: str | None = None
    REDOC_URL: str | None = None
