from __future__ import annotations

import getpass
import logging
from typing import Optional

from .command import run_cmd

logger = logging.getLogger(__name__)


def current_user() -> str:
    return getpass.getuser()


def resolve_target_user(sudo_user: Optional[str], current: str) -> str:
    """The user who invoked sudo if known, else the current user."""
    if sudo_user:
        return sudo_user
    return current


def user_exists(username: str, *, dry_run: bool = False) -> bool:
    if dry_run:
        return True
    return run_cmd(["id", "-u", username], check=False).ok


def user_groups(username: str) -> set[str]:
    r = run_cmd(["id", "-nG", username], check=False)
    if not r.ok:
        return set()
    return set(r.stdout.split())


def ensure_group_membership(username: str, group: str = "docker", *, dry_run: bool = False) -> bool:
    """Add username to group unless already a member.

    Returns True when usermod was run.
    """

    if not dry_run and group in user_groups(username):
        logger.info("User '%s' is already in the %s group.", username, group)
        return False

    logger.info("Adding user '%s' to the %s group...", username, group)
    run_cmd(["usermod", "-aG", group, username], dry_run=dry_run)
    logger.info("Note: User will need to log out and back in for group changes to take effect.")
    return True
