from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.users import current_user, ensure_group_membership, resolve_target_user, user_exists

logger = logging.getLogger(__name__)


class ConfigureGroupStep:
    step_id = "60_configure_group"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        group = str(cfg.get("docker_group", "docker"))

        user = resolve_target_user(cfg.get("sudo_user"), cfg.get("current_user") or current_user())
        decisions = state.setdefault("execution", {}).setdefault("decisions", {})
        decisions["target_user"] = user

        if user == "root" or not user_exists(user, dry_run=dry_run):
            decisions["group_action"] = "none"
            logger.debug("No non-root user to add to the %s group", group)
            return state

        changed = ensure_group_membership(user, group, dry_run=dry_run)
        decisions["group_action"] = "added" if changed else "already_member"
        return state
