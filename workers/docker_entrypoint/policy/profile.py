"""
Profile — names of the binaries and account the dispatcher wires together.

Core dispatch logic holds no hard-coded names; swapping the init
supervisor or the privilege-drop tool is a profile change.
"""
from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class EntrypointProfile:
    """Describes the packaged service and the wrappers placed around it."""

    profile_id: str

    # Service binary, looked up on PATH
    service_binary: str
    service_account: str

    # Wrappers
    init_supervisor: str
    privilege_drop: str

    help_flag: str = "-h"
    flag_marker: str = "-"

    def init_segment(self) -> Tuple[str, ...]:
        return (self.init_supervisor, "--")

    def privilege_segment(self) -> Tuple[str, ...]:
        return (self.privilege_drop, self.service_account)

    @classmethod
    def v0(cls) -> "EntrypointProfile":
        """symbolserver under tini, stepped down from root with gosu."""
        return cls(
            profile_id="symbolserver-tini-gosu",
            service_binary="symbolserver",
            service_account="symbolserver",
            init_supervisor="tini",
            privilege_drop="gosu",
        )
