from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.services import enable_now

logger = logging.getLogger(__name__)


class EnableServicesStep:
    step_id = "50_enable_services"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        units = list(cfg.get("services") or [])

        logger.info("Enabling and starting Docker services: %s", ", ".join(units))
        enable_now(units, dry_run=dry_run)
        return state
