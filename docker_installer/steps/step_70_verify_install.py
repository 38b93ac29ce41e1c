from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.docker import detect_compose, docker_version

logger = logging.getLogger(__name__)


class VerificationError(RuntimeError):
    pass


class VerifyInstallStep:
    step_id = "70_verify_install"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        docker = state.setdefault("docker", {})

        logger.info("Verifying Docker installation...")
        docker["version"] = docker_version(dry_run=dry_run)
        logger.info("%s", docker["version"])

        compose = detect_compose(dry_run=dry_run)
        if compose is None:
            docker["compose"] = {"kind": None, "version": None}
            logger.error("Docker Compose installation failed.")
            raise VerificationError("Docker Compose not found (neither plugin nor standalone)")

        docker["compose"] = {"kind": compose.kind, "version": compose.version}
        logger.info("Docker Compose %s: %s", compose.kind, compose.version)
        return state
