from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict

from .lib.env import PATHS
from .lib.pacman import DEFAULT_MAX_ATTEMPTS, DEFAULT_WAIT_S

logger = logging.getLogger(__name__)


def _detect_format(path: Path) -> str:
    ext = path.suffix.lower().lstrip(".")
    if ext in {"json", "yaml", "yml"}:
        return ext
    # Default to JSON for unknown extensions.
    return "json"


def save_report(path: str, state: Dict[str, Any]) -> None:
    """Write the run state for the operator. It is never read back."""

    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)

    fmt = _detect_format(p)
    if fmt in {"yaml", "yml"}:
        try:
            import yaml  # type: ignore
        except Exception as e:  # pragma: no cover
            raise RuntimeError(
                "YAML report requested but PyYAML is not available. "
                "Use a .json report path or install PyYAML."
            ) from e
        p.write_text(yaml.safe_dump(state, sort_keys=False) + "\n", encoding="utf-8")
    else:
        p.write_text(json.dumps(state, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    logger.info("Report written to %s", p)


def ensure_defaults(state: Dict[str, Any]) -> Dict[str, Any]:
    """Fill required keys with sane defaults (without overriding user values)."""

    state.setdefault("config", {})
    state.setdefault("docker", {})
    state.setdefault("execution", {})

    cfg = state["config"]
    cfg.setdefault("dry_run", False)
    cfg.setdefault("pacman_lock_path", PATHS.pacman_lock)
    cfg.setdefault("pacman_max_attempts", DEFAULT_MAX_ATTEMPTS)
    cfg.setdefault("pacman_retry_wait_s", DEFAULT_WAIT_S)
    cfg.setdefault("packages", ["docker", "docker-compose", "containerd", "runc"])
    cfg.setdefault("services", ["docker.service", "containerd.service"])
    cfg.setdefault("docker_group", "docker")
    # yay is bootstrapped from the AUR when missing; docker-compose-bin
    # tracks upstream compose releases more closely than the repo package.
    cfg.setdefault("aur_helper", "yay")
    cfg.setdefault("aur_helper_repo", PATHS.yay_repo)
    cfg.setdefault("aur_packages", ["docker-compose-bin"])
    cfg.setdefault("smoke_test_image", "hello-world")
    cfg.setdefault("skip_steps", [])
    cfg.setdefault("sudo_user", None)
    cfg.setdefault("current_user", None)

    exe = state["execution"]
    exe.setdefault("path", None)
    exe.setdefault("current_step", None)
    exe.setdefault("completed_steps", [])
    exe.setdefault("skipped_steps", [])
    exe.setdefault("decisions", {})
    exe.setdefault("warnings", [])
    exe.setdefault("errors", [])

    return state


def mark_step_completed(state: Dict[str, Any], step_id: str) -> None:
    exe = state.setdefault("execution", {})
    completed = exe.setdefault("completed_steps", [])
    if step_id not in completed:
        completed.append(step_id)


def add_warning(state: Dict[str, Any], message: str) -> None:
    logger.warning("%s", message)
    state.setdefault("execution", {}).setdefault("warnings", []).append(message)
