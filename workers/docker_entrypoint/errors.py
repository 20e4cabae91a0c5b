"""
Errors raised before the exec transfer.

Anything derived from ``EntrypointError`` aborts startup with a non-zero
exit status and no process replacement.
"""


class EntrypointError(Exception):
    """Base class for fatal dispatcher failures."""


class ProbeError(EntrypointError):
    """The subcommand probe could not produce a yes/no answer."""


class ServiceBinaryUnavailable(ProbeError):
    """The service binary could not be started at all (missing or not executable)."""

    def __init__(self, binary: str, reason: str):
        self.binary = binary
        self.reason = reason
        super().__init__(f"cannot run service binary '{binary}': {reason}")


class PrivilegeSetupError(EntrypointError):
    """Data directory preparation under root identity failed."""
