from __future__ import annotations

import logging
from typing import Any, Dict

from ..lib.users import current_user, ensure_group_membership, resolve_target_user, user_exists
from ..state_store import add_warning

logger = logging.getLogger(__name__)


class ExistingUserGroupStep:
    step_id = "30_existing_group"

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        cfg = state.get("config") or {}
        dry_run = bool(cfg.get("dry_run", False))
        group = str(cfg.get("docker_group", "docker"))

        user = resolve_target_user(cfg.get("sudo_user"), cfg.get("current_user") or current_user())
        decisions = state.setdefault("execution", {}).setdefault("decisions", {})
        decisions["target_user"] = user

        # Running as plain root (no SUDO_USER) leaves nobody to add.
        if user != "root" and user_exists(user, dry_run=dry_run):
            changed = ensure_group_membership(user, group, dry_run=dry_run)
            decisions["group_action"] = "added" if changed else "already_member"
        else:
            decisions["group_action"] = "none"
            add_warning(
                state,
                "Could not identify a non-root user. Docker will only be available for the root user.",
            )
        return state
