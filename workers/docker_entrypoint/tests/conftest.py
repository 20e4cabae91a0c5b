"""
Shared pytest fixtures for docker_entrypoint tests.

Provides a recording fake probe, the v0 profile, and a throwaway
shell-script stand-in for the service binary.

Tests that execute scripts are skipped on Windows.
"""
import os
import platform
import pwd
import textwrap
from pathlib import Path
from typing import Iterable, List

import pytest

from docker_entrypoint.config import EntrypointSettings
from docker_entrypoint.policy.profile import EntrypointProfile

# Stand-in for `symbolserver`: `<sub> -h` succeeds only for known subcommands.
FAKE_SERVICE_SH = textwrap.dedent("""\
    #!/bin/sh
    echo "usage: symbolserver $*"
    echo "noise on stderr" >&2
    case "$1" in
        run|sync|dump-memdb|convert-sdk)
            [ "$2" = "-h" ] && exit 0
            ;;
    esac
    exit 1
""")


class FakeProbe:
    """Answers from a fixed set of subcommands and records every call."""

    def __init__(self, known: Iterable[str] = ()):
        self.known = set(known)
        self.calls: List[str] = []

    def __call__(self, subcommand: str) -> bool:
        self.calls.append(subcommand)
        return subcommand in self.known


@pytest.fixture
def profile() -> EntrypointProfile:
    return EntrypointProfile.v0()


@pytest.fixture
def make_probe():
    """Factory for probes with a custom set of known subcommands."""
    return FakeProbe


@pytest.fixture
def probe() -> FakeProbe:
    """Probe that knows the service's real subcommands."""
    return FakeProbe(known={"run", "sync", "dump-memdb", "convert-sdk"})


@pytest.fixture
def current_account() -> str:
    """Name of the account running the tests (chown to self needs no privilege)."""
    return pwd.getpwuid(os.getuid()).pw_name


@pytest.fixture
def settings(tmp_path, monkeypatch) -> EntrypointSettings:
    data_dir = tmp_path / "var" / "lib" / "symbolserver"
    monkeypatch.setenv("SYMBOLSERVER_SYMBOL_DIR", str(data_dir))
    monkeypatch.delenv("ENTRYPOINT_DRY_RUN", raising=False)
    return EntrypointSettings()


@pytest.fixture
def posix_only():
    if platform.system() == "Windows":
        pytest.skip("shell-script fixtures need a POSIX system")


@pytest.fixture
def fake_service(tmp_path, posix_only) -> Path:
    """Executable shell script behaving like the service's help probe."""
    path = tmp_path / "bin" / "symbolserver"
    path.parent.mkdir(parents=True)
    path.write_text(FAKE_SERVICE_SH)
    path.chmod(0o755)
    return path
