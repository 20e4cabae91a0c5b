"""
Dispatch — pure decision logic: argument vector → exec chain.

Evaluation order:
  1. Leading flag            → FLAG_LED, prepend the service binary.
  2. Probe says subcommand   → KNOWN_SUBCOMMAND, prepend the service binary.
  3. Anything else           → ARBITRARY_COMMAND, vector untouched.
  4. First token is the service binary → wrap with the init supervisor.
  5. ... and running as root → data directory to prepare + privilege drop.

Nothing here touches the filesystem or the process table; identity and
the probe are passed in by the caller.
"""
from dataclasses import dataclass
from enum import Enum, unique
from typing import Optional, Sequence, Tuple

from docker_entrypoint.core.probe import SubcommandProbe
from docker_entrypoint.errors import EntrypointError
from docker_entrypoint.policy.profile import EntrypointProfile


@unique
class InvocationMode(str, Enum):
    FLAG_LED = "FLAG_LED"
    KNOWN_SUBCOMMAND = "KNOWN_SUBCOMMAND"
    ARBITRARY_COMMAND = "ARBITRARY_COMMAND"


@unique
class Identity(str, Enum):
    ROOT = "ROOT"
    UNPRIVILEGED = "UNPRIVILEGED"

    @classmethod
    def from_euid(cls, euid: int) -> "Identity":
        return cls.ROOT if euid == 0 else cls.UNPRIVILEGED


@dataclass(frozen=True)
class DispatchPlan:
    """Everything the runner needs to hand over to the final command."""

    mode: InvocationMode
    identity: Identity
    argv: Tuple[str, ...]          # rewritten vector, before wrapping
    chain: Tuple[str, ...]         # final exec vector
    supervised: bool = False
    data_dir: Optional[str] = None  # prepare before exec when set


def classify_invocation(
    argv: Sequence[str],
    profile: EntrypointProfile,
    probe: SubcommandProbe,
) -> InvocationMode:
    """Decide what the caller meant by *argv*.  Probes at most once."""
    first = argv[0]
    if first.startswith(profile.flag_marker):
        return InvocationMode.FLAG_LED
    if probe(first):
        return InvocationMode.KNOWN_SUBCOMMAND
    return InvocationMode.ARBITRARY_COMMAND


def rewrite_argv(
    argv: Sequence[str],
    mode: InvocationMode,
    profile: EntrypointProfile,
) -> Tuple[str, ...]:
    if mode == InvocationMode.ARBITRARY_COMMAND:
        return tuple(argv)
    return (profile.service_binary, *argv)


def build_exec_chain(
    argv: Sequence[str],
    identity: Identity,
    profile: EntrypointProfile,
) -> Tuple[str, ...]:
    """Wrap a rewritten vector; arbitrary commands pass through bare."""
    if not argv or argv[0] != profile.service_binary:
        return tuple(argv)

    chain = (*profile.init_segment(), *argv)
    if identity == Identity.ROOT:
        chain = (*profile.privilege_segment(), *chain)
    return chain


def plan_dispatch(
    argv: Sequence[str],
    identity: Identity,
    profile: EntrypointProfile,
    probe: SubcommandProbe,
    data_dir: Optional[str] = None,
) -> DispatchPlan:
    """
    Compute the dispatch plan for one container start.

    Parameters
    ----------
    argv : sequence of str
        Arguments received by the entrypoint, without the program name.
    identity : Identity
        Effective identity of the dispatcher process.
    profile : EntrypointProfile
        Binary and account names.
    probe : SubcommandProbe
        Called with ``argv[0]`` unless the vector is flag-led.
    data_dir : str, optional
        Service data directory; only reported back when it must be
        prepared (service binary under root).

    Raises
    ------
    EntrypointError
        Empty argument vector.
    ProbeError
        The probe could not run the service binary.
    """
    if not argv:
        raise EntrypointError("no command given and the image defines no default")

    mode = classify_invocation(argv, profile, probe)
    rewritten = rewrite_argv(argv, mode, profile)
    chain = build_exec_chain(rewritten, identity, profile)

    supervised = rewritten[0] == profile.service_binary
    needs_dir = supervised and identity == Identity.ROOT and bool(data_dir)

    return DispatchPlan(
        mode=mode,
        identity=identity,
        argv=rewritten,
        chain=chain,
        supervised=supervised,
        data_dir=data_dir if needs_dir else None,
    )
