from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.docker import docker_installed

logger = logging.getLogger(__name__)

PATH_INSTALLED_VERIFY = "installed_verify"
PATH_FRESH_INSTALL = "fresh_install"


class DetectDockerStep:
    step_id = "10_detect_docker"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        logger.info("Preparing Docker installation for Arch Linux...")

        present = docker_installed()
        state.setdefault("docker", {})["preinstalled"] = present
        path = PATH_INSTALLED_VERIFY if present else PATH_FRESH_INSTALL
        state.setdefault("execution", {})["path"] = path

        logger.info("Docker binary %s; taking %s path", "found" if present else "not found", path)
        return state
