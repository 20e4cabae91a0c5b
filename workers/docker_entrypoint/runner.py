"""
Entrypoint runner — plan, prepare, exec.

``run_entrypoint`` does everything up to (not including) the process
replacement so it can be exercised in tests; ``exec_plan`` is the
non-returning boundary.  ``main`` is the console entry point installed
as ``docker-entrypoint``.
"""
import json
import logging
import os
import sys
from typing import Callable, List, Optional

from pydantic import ValidationError

from docker_entrypoint.config import EntrypointSettings
from docker_entrypoint.core.datadir import prepare_data_dir
from docker_entrypoint.core.dispatch import DispatchPlan, Identity, plan_dispatch
from docker_entrypoint.core.probe import HelpFlagProbe, SubcommandProbe
from docker_entrypoint.errors import EntrypointError
from docker_entrypoint.io.schema import DispatchReport
from docker_entrypoint.policy.profile import EntrypointProfile

logger = logging.getLogger(__name__)

# POSIX shell conventions for a command that could not be exec'd
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def run_entrypoint(
    argv: List[str],
    identity: Identity,
    settings: EntrypointSettings,
    profile: Optional[EntrypointProfile] = None,
    probe: Optional[SubcommandProbe] = None,
    prepare: Optional[Callable[[str, str], object]] = None,
) -> DispatchPlan:
    """
    Compute the plan and perform the data directory side effect.

    The directory is prepared at most once, only when the plan asks for
    it (service binary started as root).
    """
    if profile is None:
        profile = EntrypointProfile.v0()
    if probe is None:
        probe = HelpFlagProbe(profile.service_binary, profile.help_flag)
    if prepare is None:
        prepare = prepare_data_dir

    plan = plan_dispatch(
        argv,
        identity,
        profile,
        probe,
        data_dir=settings.SYMBOLSERVER_SYMBOL_DIR,
    )
    logger.info("Invocation mode %s, identity %s", plan.mode.value, plan.identity.value)

    if plan.data_dir is not None:
        prepare(plan.data_dir, profile.service_account)

    return plan


def exec_plan(plan: DispatchPlan) -> int:
    """
    Replace the current process with ``plan.chain``.

    Only returns when the exec itself failed; the return value is then
    the exit status to report.
    """
    logger.debug("exec: %s", " ".join(plan.chain))
    try:
        os.execvp(plan.chain[0], list(plan.chain))
    except FileNotFoundError:
        logger.error("%s: command not found", plan.chain[0])
        return EXIT_NOT_FOUND
    except PermissionError:
        logger.error("%s: permission denied", plan.chain[0])
        return EXIT_NOT_EXECUTABLE
    except OSError as e:
        logger.error("%s: %s", plan.chain[0], e)
        return EXIT_NOT_EXECUTABLE
    return EXIT_NOT_EXECUTABLE  # unreachable after a successful exec


def _skip_prepare(path: str, account: str) -> None:
    logger.info("Dry run: not preparing %s for %s", path, account)


def main(argv: Optional[List[str]] = None) -> int:
    """Console entry point: dispatch ``sys.argv[1:]``."""
    try:
        settings = EntrypointSettings()
    except ValidationError as e:
        logging.basicConfig(stream=sys.stderr, format=LOG_FORMAT)
        logger.error("Invalid entrypoint settings: %s", e)
        return 1

    logging.basicConfig(
        level=settings.ENTRYPOINT_LOG_LEVEL,
        stream=sys.stderr,
        format=LOG_FORMAT,
    )

    if argv is None:
        argv = sys.argv[1:]
    profile = EntrypointProfile.v0()
    identity = Identity.from_euid(os.geteuid())
    probe = HelpFlagProbe(profile.service_binary, profile.help_flag)
    prepare = _skip_prepare if settings.ENTRYPOINT_DRY_RUN else None

    try:
        plan = run_entrypoint(
            argv, identity, settings, profile=profile, probe=probe, prepare=prepare,
        )
    except EntrypointError as e:
        logger.error("%s", e)
        return 1

    if settings.ENTRYPOINT_DRY_RUN:
        report = DispatchReport.from_plan(plan, profile.profile_id)
        print(json.dumps(report.model_dump(mode="json"), indent=2, sort_keys=True))
        return 0

    return exec_plan(plan)


if __name__ == "__main__":
    sys.exit(main())
