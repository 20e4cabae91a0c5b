"""
Probe — ask the service binary whether a word is one of its subcommands.

``symbolserver <word> -h`` exits 0 exactly when ``<word>`` is a
recognized subcommand.  A binary that cannot be started at all is a
different failure and is raised, never reported as "no".
"""
import logging
import subprocess
from typing import Protocol

from docker_entrypoint.errors import ServiceBinaryUnavailable

logger = logging.getLogger(__name__)


class SubcommandProbe(Protocol):
    """Answers whether *subcommand* is known to the service binary."""

    def __call__(self, subcommand: str) -> bool:
        ...


class HelpFlagProbe:
    """Runs ``<binary> <subcommand> <help_flag>`` with all output discarded."""

    def __init__(self, binary: str, help_flag: str = "-h"):
        self.binary = binary
        self.help_flag = help_flag

    def __call__(self, subcommand: str) -> bool:
        cmd = [self.binary, subcommand, self.help_flag]
        logger.debug("Probing subcommand: %s", " ".join(cmd))

        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
            )
        except FileNotFoundError as e:
            raise ServiceBinaryUnavailable(self.binary, "not found on PATH") from e
        except PermissionError as e:
            raise ServiceBinaryUnavailable(self.binary, "not executable") from e
        except OSError as e:
            raise ServiceBinaryUnavailable(self.binary, str(e)) from e

        logger.debug("Probe for %r exited with %d", subcommand, result.returncode)
        return result.returncode == 0
