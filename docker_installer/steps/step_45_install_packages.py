from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pacman import pacman_install, pacman_options

logger = logging.getLogger(__name__)


class InstallPackagesStep:
    step_id = "45_install_packages"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        packages = [str(p).strip() for p in (cfg.get("packages") or []) if str(p).strip()]
        if not packages:
            raise RuntimeError("config.packages is empty")

        logger.info("Installing Docker from official Arch repositories: %s", " ".join(packages))
        pacman_install(packages, **pacman_options(cfg))
        state.setdefault("execution", {}).setdefault("decisions", {})["packages"] = packages
        return state
