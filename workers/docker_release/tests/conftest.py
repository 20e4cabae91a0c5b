"""
Shared pytest fixtures for docker_release tests.

Provides sample Dockerfiles, an in-memory docker client that records
every call, and a shell-script stand-in for the docker executable.
"""
import platform
import textwrap
from pathlib import Path
from typing import List, Optional, Tuple

import pytest

from docker_release.errors import ExternalToolFailure
from docker_release.policy.profile import ReleaseProfile

# Trimmed copy of the image's Dockerfile header.
DOCKERFILE = textwrap.dedent("""\
    FROM python:3.12-slim-bookworm

    RUN groupadd -r symbolserver && useradd -r -g symbolserver symbolserver

    ENV SYMBOLSERVER_VERSION 1.4.0
    ENV SYMBOLSERVER_DOWNLOAD_URL https://github.com/getsentry/symbolserver/releases/download/1.4.0/sentry-symbolserver-Linux-x86_64
    ENV SYMBOLSERVER_DOWNLOAD_SHA256 1c588b5ca2df5636bb40374d1f3d3e2187438e70b49b55a08eb215485517c987

    ENV SYMBOLSERVER_SYMBOL_DIR /var/lib/symbolserver
    CMD [ "symbolserver" ]
""")

IMAGE_ID = "sha256:4b825dc642cb6eb9a060e54bf8d69288fbee4904"

# Stand-in for `docker`: logs its argv, fails on a configured command line.
FAKE_DOCKER_SH = textwrap.dedent("""\
    #!/bin/sh
    here="$(dirname "$0")"
    echo "$*" >> "$here/calls.log"
    if [ -f "$here/fail_on" ] && [ "$*" = "$(cat "$here/fail_on")" ]; then
        echo "denied: requested access to the resource is denied" >&2
        exit 3
    fi
    if [ "$1" = "image" ]; then
        echo "%s"
    fi
    exit 0
""") % IMAGE_ID


class FakeDocker:
    """Records build/tag/push/inspect calls; optionally fails one of them."""

    def __init__(self, fail_on: Optional[Tuple[str, ...]] = None, dry_run: bool = False):
        self.fail_on = fail_on
        self.dry_run = dry_run
        self.calls: List[Tuple[str, ...]] = []
        self.tags = {}

    def _record(self, *call: str) -> None:
        self.calls.append(call)
        if self.fail_on == call:
            raise ExternalToolFailure(["docker", *call], 1)

    def build(self, ref, recipe, context=None):
        self._record("build", ref)
        self.tags[ref] = IMAGE_ID

    def image_id(self, ref):
        self._record("inspect", ref)
        return self.tags[ref]

    def tag(self, source_ref, target_ref):
        self._record("tag", source_ref, target_ref)
        self.tags[target_ref] = self.tags[source_ref]

    def push(self, ref):
        self._record("push", ref)

    @property
    def pushes(self) -> List[str]:
        return [c[1] for c in self.calls if c[0] == "push"]


@pytest.fixture
def profile() -> ReleaseProfile:
    return ReleaseProfile.v0()


@pytest.fixture
def recipe(tmp_path) -> Path:
    path = tmp_path / "Dockerfile"
    path.write_text(DOCKERFILE)
    return path


@pytest.fixture
def make_docker():
    """Factory for FakeDocker instances."""
    return FakeDocker


@pytest.fixture
def docker() -> FakeDocker:
    return FakeDocker()


@pytest.fixture
def fake_docker_bin(tmp_path) -> Path:
    """Executable docker stand-in; its calls land in calls.log beside it."""
    if platform.system() == "Windows":
        pytest.skip("shell-script fixtures need a POSIX system")
    path = tmp_path / "bin" / "docker"
    path.parent.mkdir(parents=True)
    path.write_text(FAKE_DOCKER_SH)
    path.chmod(0o755)
    return path
