"""
Release configuration (environment overrides)

Repository, aliases and the version key are compiled into
``ReleaseProfile``; only the tooling location is environment-driven.
"""
from pydantic_settings import BaseSettings


class ReleaseSettings(BaseSettings):
    """Release settings"""

    DOCKER_BINARY: str = "docker"
    RELEASE_RECIPE: str = "Dockerfile"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"
