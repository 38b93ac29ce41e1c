from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.docker import docker_version

logger = logging.getLogger(__name__)


class ReportExistingStep:
    step_id = "20_report_existing"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        logger.info("Docker is already installed.")
        version = docker_version(dry_run=dry_run)
        state.setdefault("docker", {})["version"] = version
        logger.info("%s", version)
        return state
