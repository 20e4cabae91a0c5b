"""
Release errors.  Every one of them ends the run with a non-zero status.
"""
from typing import Sequence


class ReleaseError(Exception):
    """Base class for release pipeline failures."""


class ConfigurationError(ReleaseError):
    """Version declaration missing or malformed; raised before any docker call."""


class ExternalToolFailure(ReleaseError):
    """A docker command could not be started or exited non-zero."""

    def __init__(self, cmd: Sequence[str], returncode: int, detail: str = ""):
        self.cmd = list(cmd)
        self.returncode = returncode
        self.detail = detail
        # Set by the runner to the failed run's ReleaseReceipt
        self.receipt = None
        message = f"'{' '.join(self.cmd)}' failed with exit code {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
