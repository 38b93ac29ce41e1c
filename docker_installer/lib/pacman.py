from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Dict, Sequence

from .command import CmdResult, CommandError, fmt_argv, run_cmd
from .env import PATHS

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 10
DEFAULT_WAIT_S = 10.0


class PacmanError(CommandError):
    """Pacman kept failing (or stayed locked) for every attempt."""


def run_pacman(
    args: Sequence[str],
    *,
    lock_path: str = PATHS.pacman_lock,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    wait_s: float = DEFAULT_WAIT_S,
    dry_run: bool = False,
) -> CmdResult:
    """Run `pacman <args>`, retrying while the db lock is held or the command fails.

    Lock waits and failed runs draw from the same attempt budget, so a lock
    that is never released exhausts every attempt without running pacman.
    """

    argv = ["pacman", *args]
    lock = Path(lock_path)
    last_rc = 1

    if dry_run:
        if lock.exists():
            logger.info("Pacman lock %s is held; not waiting in dry run", lock)
        return run_cmd(argv, check=False, dry_run=True)

    for attempt in range(1, max_attempts + 1):
        if lock.exists():
            logger.info("Pacman lock found, waiting... (attempt %d/%d)", attempt, max_attempts)
            time.sleep(wait_s)
            continue

        r = run_cmd(argv, check=False, dry_run=dry_run)
        if r.returncode == 0:
            return r

        last_rc = r.returncode
        if attempt < max_attempts:
            logger.warning(
                "pacman exited with %d (attempt %d/%d), retrying in %ss",
                r.returncode,
                attempt,
                max_attempts,
                wait_s,
            )
            time.sleep(wait_s)

    logger.error(
        "Failed to acquire lock or run command after %d attempts: %s",
        max_attempts,
        fmt_argv(argv),
    )
    raise PacmanError(argv, last_rc)


def pacman_options(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """Keyword arguments for run_pacman taken from state['config']."""
    return {
        "lock_path": str(cfg.get("pacman_lock_path") or PATHS.pacman_lock),
        "max_attempts": int(cfg.get("pacman_max_attempts", DEFAULT_MAX_ATTEMPTS)),
        "wait_s": float(cfg.get("pacman_retry_wait_s", DEFAULT_WAIT_S)),
        "dry_run": bool(cfg.get("dry_run", False)),
    }


def pacman_upgrade(**kwargs) -> CmdResult:
    return run_pacman(["-Syu", "--noconfirm"], **kwargs)


def pacman_install(packages: Sequence[str], **kwargs) -> CmdResult | None:
    if not packages:
        return None
    return run_pacman(["-S", "--needed", "--noconfirm", *packages], **kwargs)
