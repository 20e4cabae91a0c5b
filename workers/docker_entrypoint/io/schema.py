"""
Schema — JSON view of a dispatch plan, printed in dry-run mode.

Runtime contract fields: package_name, schema_version, profile_id.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from docker_entrypoint import PACKAGE_NAME, SCHEMA_VERSION
from docker_entrypoint.core.dispatch import DispatchPlan


class DispatchReport(BaseModel):
    """Serializable form of ``DispatchPlan``."""

    package_name: str = PACKAGE_NAME
    schema_version: str = SCHEMA_VERSION
    profile_id: str

    mode: str        # FLAG_LED | KNOWN_SUBCOMMAND | ARBITRARY_COMMAND
    identity: str    # ROOT | UNPRIVILEGED
    argv: List[str] = Field(default_factory=list)
    chain: List[str] = Field(default_factory=list)
    supervised: bool = False
    data_dir: Optional[str] = None

    @classmethod
    def from_plan(cls, plan: DispatchPlan, profile_id: str) -> "DispatchReport":
        return cls(
            profile_id=profile_id,
            mode=plan.mode.value,
            identity=plan.identity.value,
            argv=list(plan.argv),
            chain=list(plan.chain),
            supervised=plan.supervised,
            data_dir=plan.data_dir,
        )
