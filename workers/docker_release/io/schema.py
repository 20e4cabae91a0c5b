"""
Schema — Pydantic model for the release receipt.

One receipt per run, written on success and on failure, recording which
tags actually reached the registry.

Runtime contract fields: package_name, schema_version, profile_id.
"""
from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from docker_release import PACKAGE_NAME, SCHEMA_VERSION


class ReleaseStatus(str, Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"


class ReleaseStep(str, Enum):
    """Where a run stopped."""
    BUILD = "BUILD"
    INSPECT = "INSPECT"
    PUSH_VERSION = "PUSH_VERSION"
    TAG_ALIAS = "TAG_ALIAS"
    PUSH_ALIAS = "PUSH_ALIAS"


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ReleaseReceipt(BaseModel):
    """Outcome of one release run."""

    package_name: str = PACKAGE_NAME
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    repository: str
    version: str
    recipe_path: str
    aliases: List[str] = Field(default_factory=list)
    dry_run: bool = False

    image_id: Optional[str] = None
    # In push order; the version ref is always first
    pushed_tags: List[str] = Field(default_factory=list)

    status: ReleaseStatus = ReleaseStatus.FAILED
    failed_step: Optional[ReleaseStep] = None
    failed_ref: Optional[str] = None
    error: Optional[str] = None

    started_at: datetime = Field(default_factory=_now)
    finished_at: Optional[datetime] = None

    def mark_failed(self, step: ReleaseStep, ref: str, error: str) -> None:
        self.status = ReleaseStatus.FAILED
        self.failed_step = step
        self.failed_ref = ref
        self.error = error
        self.finished_at = _now()

    def mark_succeeded(self) -> None:
        self.status = ReleaseStatus.SUCCESS
        self.finished_at = _now()
