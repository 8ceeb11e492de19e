# ezgest/config/environments/staging.py
from ezgest.config.environments.base import BackendBaseSettings
from ezgest.config.environments.environment import Environment


class BackendStageSettings(BackendBaseSettings):
    """Staging-specific settings"""
    DESCRIPTION: str | None = "Staging Environment - EzGest API"
    DEBUG: bool = True
    ENVIRONMENT: Environment = Environment.STAGING
