# ezgest/config/setting.py
"""
Settings manager: picks the settings class for the current ENVIRONMENT
and exposes a single global ``settings`` instance.
"""
from decouple import config

from ezgest.config.environments.base import BackendBaseSettings
from ezgest.config.environments.development import BackendDevSettings
from ezgest.config.environments.staging import BackendStageSettings
from ezgest.config.environments.production import BackendProdSettings

ENV = config("ENVIRONMENT", default="DEV")

DEFAULT_SECRETS = {"", "change-me", "your-secret-key-change-in-production"}


def get_settings() -> BackendBaseSettings:
    """
    Factory function to return appropriate settings based on environment
    """
    env_map = {
        "DEV": BackendDevSettings,
        "DEVELOPMENT": BackendDevSettings,
        "STAGE": BackendStageSettings,
        "STAGING": BackendStageSettings,
        "PROD": BackendProdSettings,
        "PRODUCTION": BackendProdSettings,
    }

    settings_class = env_map.get(ENV.upper(), BackendDevSettings)
    return settings_class()


settings = get_settings()


def validate_settings():
    """Validate critical settings on startup"""
    errors = []

    if not settings.MONGODB_URI:
        errors.append("MONGODB_URI must be set")

    if not settings.DATABASE_NAME:
        errors.append("DATABASE_NAME must be set")

    if settings.JWT_SECRET_KEY in DEFAULT_SECRETS:
        errors.append("JWT_SECRET_KEY should be changed from default value")

    if settings.JWT_ALGORITHM != "HS256":
        errors.append("JWT_ALGORITHM must be HS256")

    if settings.TOKEN_TTL_MS <= 0:
        errors.append("TOKEN_TTL_MS must be positive")

    if errors:
        raise ValueError(f"Configuration errors: {', '.join(errors)}")

    return True

