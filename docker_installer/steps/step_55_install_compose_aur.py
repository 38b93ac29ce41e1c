from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.aur import aur_install, ensure_aur_helper
from ..lib.env import PATHS
from ..lib.pacman import pacman_options

logger = logging.getLogger(__name__)


class InstallComposeAurStep:
    """Install the newer compose build from the AUR.

    The helper is bootstrapped when missing; a failed bootstrap aborts the run.
    """

    step_id = "55_install_compose_aur"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        helper = str(cfg.get("aur_helper", "yay"))
        packages = list(cfg.get("aur_packages") or [])

        available = ensure_aur_helper(
            helper=helper,
            repo_url=str(cfg.get("aur_helper_repo") or PATHS.yay_repo),
            dry_run=dry_run,
            pacman_opts=pacman_options(cfg),
        )
        decisions = state.setdefault("execution", {}).setdefault("decisions", {})
        decisions["aur_helper_available"] = available

        if not available:
            logger.info("%s still not on PATH after bootstrap; keeping repo docker-compose", helper)
            return state

        if packages:
            logger.info("Installing Docker Compose plugin from AUR (for latest version)...")
            aur_install(packages, helper=helper, dry_run=dry_run)
            decisions["aur_packages"] = packages
        return state
