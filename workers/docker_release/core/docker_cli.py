"""
Docker CLI wrapper — build, tag, push, inspect.

Commands inherit this process's stdout/stderr so docker's own
diagnostics are what the operator sees.  Registry credentials are the
docker client's business.
"""
import logging
import subprocess
from pathlib import Path
from typing import List, Optional

from docker_release.errors import ExternalToolFailure

logger = logging.getLogger(__name__)


class DockerCli:
    """Thin synchronous wrapper around the ``docker`` executable."""

    def __init__(self, binary: str = "docker", dry_run: bool = False):
        self.binary = binary
        self.dry_run = dry_run

    def _run(self, args: List[str], capture: bool = False) -> str:
        """Run one docker command; raise ``ExternalToolFailure`` on any failure."""
        cmd = [self.binary, *args]
        logger.info("Running: %s", " ".join(cmd))
        if self.dry_run:
            return ""

        try:
            result = subprocess.run(
                cmd,
                check=False,
                stdout=subprocess.PIPE if capture else None,
                text=True,
            )
        except OSError as e:
            raise ExternalToolFailure(cmd, 127, str(e)) from e

        if result.returncode != 0:
            raise ExternalToolFailure(cmd, result.returncode)
        return result.stdout or ""

    def build(self, ref: str, recipe: Path, context: Optional[Path] = None) -> None:
        """Build from scratch: no layer cache, base images re-pulled."""
        if context is None:
            context = recipe.parent
        self._run([
            "build",
            "--pull",
            "--no-cache",
            "--rm",
            "-t", ref,
            "-f", str(recipe),
            str(context),
        ])

    def tag(self, source_ref: str, target_ref: str) -> None:
        self._run(["tag", source_ref, target_ref])

    def push(self, ref: str) -> None:
        self._run(["push", ref])

    def image_id(self, ref: str) -> Optional[str]:
        """Content id of *ref* (``sha256:...``); None in dry-run mode."""
        out = self._run(["image", "inspect", "--format", "{{.Id}}", ref], capture=True)
        return out.strip() or None
