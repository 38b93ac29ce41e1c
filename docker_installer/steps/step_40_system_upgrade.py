from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.pacman import pacman_options, pacman_upgrade

logger = logging.getLogger(__name__)


class SystemUpgradeStep:
    step_id = "40_system_upgrade"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}

        logger.info("Updating system packages...")
        pacman_upgrade(**pacman_options(cfg))
        return state
