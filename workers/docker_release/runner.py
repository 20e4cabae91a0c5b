"""
Release runner — top-level orchestration: Dockerfile → version tag → aliases.

Steps, strictly in order, no retries:
  1. Parse the version from the recipe (fails before any docker call).
  2. Build ``repo:version`` fresh.
  3. Push ``repo:version``.  Nothing else happens if this fails.
  4. For each alias: tag ``repo:alias`` from the version ref, push it.
     The first failure stops the run; aliases already pushed stay pushed.

Can be called programmatically via ``run_release`` or from the
``publish-docker`` CLI.
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from docker_release.config import ReleaseSettings
from docker_release.core.docker_cli import DockerCli
from docker_release.core.recipe import (
    check_download_url,
    parse_env_declarations,
    parse_version,
    read_recipe_lines,
)
from docker_release.errors import ConfigurationError, ExternalToolFailure
from docker_release.io.schema import ReleaseReceipt, ReleaseStep
from docker_release.io.writer import RECEIPT_FILENAME, write_receipt
from docker_release.policy.profile import ReleaseProfile

logger = logging.getLogger(__name__)

EXIT_CONFIGURATION = 2


def run_release(
    profile: Optional[ReleaseProfile] = None,
    recipe_path: Optional[Path] = None,
    docker: Optional[DockerCli] = None,
    output_dir: Optional[Path] = None,
) -> ReleaseReceipt:
    """
    Build and publish one release.

    Parameters
    ----------
    profile : ReleaseProfile, optional
        Repository and aliases.  Defaults to ReleaseProfile.v0().
    recipe_path : Path, optional
        Build recipe.  Defaults to ``profile.recipe_name`` in the working
        directory; its directory is the build context.
    docker : DockerCli, optional
        Docker client.  Defaults to ``DockerCli()``.
    output_dir : Path, optional
        Where to write release_receipt.json.  Written on failure too.

    Returns
    -------
    ReleaseReceipt
        Always with status SUCCESS; failures raise.

    Raises
    ------
    ConfigurationError
        Version missing or malformed, or *output_dir* unusable;
        no docker command was run.
    ExternalToolFailure
        A docker command failed; its ``receipt`` attribute holds the
        FAILED receipt, whose ``pushed_tags`` were published before it.
    """
    if profile is None:
        profile = ReleaseProfile.v0()
    if recipe_path is None:
        recipe_path = Path(profile.recipe_name)
    if docker is None:
        docker = DockerCli()
    if output_dir:
        _check_output_dir(output_dir)

    # ── Step 1: version ──────────────────────────────────────────────
    lines = read_recipe_lines(recipe_path)
    version = parse_version(lines, profile.version_key, profile.declaration)
    check_download_url(
        parse_env_declarations(lines, profile.declaration),
        version,
        profile.download_url_key,
    )
    logger.info("Releasing %s version %s", profile.repository, version)

    receipt = ReleaseReceipt(
        profile_id=profile.profile_id,
        repository=profile.repository,
        version=version,
        recipe_path=str(recipe_path),
        aliases=list(profile.aliases),
        dry_run=getattr(docker, "dry_run", False),
    )
    version_ref = profile.ref(version)
    step, ref = ReleaseStep.BUILD, version_ref

    try:
        # ── Step 2: build ────────────────────────────────────────────
        docker.build(version_ref, recipe_path)
        step = ReleaseStep.INSPECT
        receipt.image_id = docker.image_id(version_ref)

        # ── Step 3: authoritative push ───────────────────────────────
        step = ReleaseStep.PUSH_VERSION
        docker.push(version_ref)
        receipt.pushed_tags.append(version_ref)

        # ── Step 4: aliases ──────────────────────────────────────────
        for alias in profile.aliases:
            ref = profile.ref(alias)
            step = ReleaseStep.TAG_ALIAS
            docker.tag(version_ref, ref)
            step = ReleaseStep.PUSH_ALIAS
            docker.push(ref)
            receipt.pushed_tags.append(ref)
    except ExternalToolFailure as e:
        receipt.mark_failed(step, ref, str(e))
        e.receipt = receipt
        logger.error("Release stopped at %s (%s)", step.value, ref)
        if output_dir:
            _save_receipt(receipt, output_dir)
        raise

    receipt.mark_succeeded()
    if output_dir:
        _save_receipt(receipt, output_dir)
    return receipt


def _check_output_dir(output_dir: Path) -> None:
    """Create *output_dir* up front so an unusable path fails before any docker call."""
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"cannot use receipt directory {output_dir}: {e}") from e


def _save_receipt(receipt: ReleaseReceipt, output_dir: Path) -> None:
    """Write the receipt; a write error never replaces the run's own outcome."""
    try:
        path = write_receipt(receipt, output_dir)
    except OSError as e:
        logger.error("Could not write release receipt to %s: %s", output_dir, e)
        return
    logger.info("Receipt written to %s", path)


def _exit_code(failure: ExternalToolFailure) -> int:
    if 0 < failure.returncode < 256:
        return failure.returncode
    return 1


# ── CLI ──────────────────────────────────────────────────────────────────────

def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point for docker_release (installed as ``publish-docker``)."""
    settings = ReleaseSettings()

    parser = argparse.ArgumentParser(
        description="Build the symbolserver image and publish it under its version and aliases",
    )
    parser.add_argument(
        "--dockerfile",
        type=Path,
        default=Path(settings.RELEASE_RECIPE),
        help="Build recipe declaring the version (default: %(default)s)",
    )
    parser.add_argument(
        "--receipt-dir",
        type=Path,
        default=None,
        help="Directory to write release_receipt.json",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Log docker commands without running them",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    docker = DockerCli(binary=settings.DOCKER_BINARY, dry_run=args.dry_run)
    try:
        receipt = run_release(
            recipe_path=args.dockerfile,
            docker=docker,
            output_dir=args.receipt_dir,
        )
    except ConfigurationError as e:
        logger.error("%s", e)
        return EXIT_CONFIGURATION
    except ExternalToolFailure as e:
        logger.error("%s", e)
        return _exit_code(e)

    print(f"Version: {receipt.version}")
    print(f"Image: {receipt.image_id or '-'}")
    for tag in receipt.pushed_tags:
        print(f"Pushed: {tag}")
    if args.receipt_dir and (args.receipt_dir / RECEIPT_FILENAME).exists():
        print(f"Receipt written to: {args.receipt_dir}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
