from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.docker import detect_compose
from ..state_store import add_warning

logger = logging.getLogger(__name__)


class CheckComposeStep:
    """Report Docker Compose on an existing install. Missing compose only warns."""

    step_id = "25_check_compose"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))

        compose = detect_compose(dry_run=dry_run)
        docker = state.setdefault("docker", {})
        if compose is None:
            docker["compose"] = {"kind": None, "version": None}
            add_warning(state, "Docker Compose not found. It will be installed.")
            return state

        docker["compose"] = {"kind": compose.kind, "version": compose.version}
        logger.info("Docker Compose %s found: %s", compose.kind, compose.version)
        return state
