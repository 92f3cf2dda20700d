"""
Application settings.

Values are read from the environment (prefixed with FITCALC_) or a local .env file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """FitCalc configuration settings."""

    app_title: str = "FitCalc API"
    database_url: str = "sqlite:///./fitcalc.db"
    log_level: str = "INFO"
    default_unit_system: str = "metric"  # used until the user stores a preference

    class Config:
        env_file = ".env"
        env_prefix = "FITCALC_"


settings = Settings()
