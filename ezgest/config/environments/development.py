# ezgest/config/environments/development.py
from ezgest.config.environments.base import BackendBaseSettings
from ezgest.config.environments.environment import Environment


class BackendDevSettings(BackendBaseSettings):
    """Development-specific settings"""
    DESCRIPTION: str | None = "Development Environment - EzGest API"
    DEBUG: bool = True
    ENVIRONMENT: Environment = Environment.DEVELOPMENT

    LOG_LEVEL: str = "DEBUG"
