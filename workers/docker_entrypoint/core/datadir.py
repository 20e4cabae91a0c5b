"""
Data directory preparation — the one filesystem side effect of the dispatcher.

Runs only under root, before privileges are dropped, so the service
account can write its symbol database.  Only the directory itself is
chowned; existing contents are left alone.
"""
import logging
import os
import pwd
from pathlib import Path
from typing import Tuple

from docker_entrypoint.errors import PrivilegeSetupError

logger = logging.getLogger(__name__)


def resolve_account(account: str) -> Tuple[int, int]:
    """Return (uid, primary gid) of *account*."""
    try:
        entry = pwd.getpwnam(account)
    except KeyError as e:
        raise PrivilegeSetupError(f"service account '{account}' does not exist") from e
    return entry.pw_uid, entry.pw_gid


def prepare_data_dir(path: str, account: str) -> Path:
    """
    Ensure *path* exists and is owned by *account*.

    Raises
    ------
    PrivilegeSetupError
        Unknown account, or mkdir/chown failed.
    """
    uid, gid = resolve_account(account)
    data_dir = Path(path)

    try:
        data_dir.mkdir(parents=True, exist_ok=True)
        os.chown(data_dir, uid, gid)
    except OSError as e:
        raise PrivilegeSetupError(f"cannot prepare data directory {data_dir}: {e}") from e

    logger.info("Data directory %s owned by %s (%d:%d)", data_dir, account, uid, gid)
    return data_dir
