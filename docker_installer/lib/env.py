from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Paths:
    pacman_lock: str = "/var/lib/pacman/db.lck"
    log_default: str = "/var/log/docker-installer.log"
    yay_repo: str = "https://aur.archlinux.org/yay.git"


PATHS = Paths()
