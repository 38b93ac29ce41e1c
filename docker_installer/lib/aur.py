from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from .command import command_exists, run_cmd
from .env import PATHS
from .pacman import pacman_install

logger = logging.getLogger(__name__)

BUILD_PREREQUISITES = ["git", "base-devel"]


def ensure_aur_helper(
    *,
    helper: str = "yay",
    repo_url: str = PATHS.yay_repo,
    dry_run: bool = False,
    pacman_opts: Optional[Mapping[str, Any]] = None,
) -> bool:
    """Make sure the AUR helper is on PATH, building it from the AUR if missing.

    Returns True when the helper is available afterwards. Clone/build/install
    failures propagate. The build directory is removed on every exit path.
    """

    if command_exists(helper):
        return True

    logger.info("%s (AUR helper) not found, installing...", helper)
    pacman_install(BUILD_PREREQUISITES, **{**(pacman_opts or {}), "dry_run": dry_run})

    with tempfile.TemporaryDirectory(prefix=f"{helper}-build-") as tmp:
        clone_dir = Path(tmp) / helper
        run_cmd(["git", "clone", repo_url, str(clone_dir)], dry_run=dry_run)
        run_cmd(["makepkg", "-si", "--noconfirm"], cwd=str(clone_dir), dry_run=dry_run)

    if dry_run:
        return True
    return command_exists(helper)


def aur_install(packages: Sequence[str], *, helper: str = "yay", dry_run: bool = False) -> None:
    if not packages:
        return
    run_cmd([helper, "-S", "--needed", "--noconfirm", *packages], dry_run=dry_run)
