"""
Entrypoint configuration (environment overrides)
"""
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings


class EntrypointSettings(BaseSettings):
    """Settings read from the container environment."""

    # Shared with the service itself, which reads the same variable
    SYMBOLSERVER_SYMBOL_DIR: str = "/var/lib/symbolserver"

    # Print the dispatch plan as JSON instead of exec'ing it
    ENTRYPOINT_DRY_RUN: bool = False
    ENTRYPOINT_LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    @field_validator("ENTRYPOINT_LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, value):
        return value.upper() if isinstance(value, str) else value

    class Config:
        case_sensitive = True
