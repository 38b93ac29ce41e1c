from __future__ import annotations

import logging
from typing import Sequence

from .command import run_cmd

logger = logging.getLogger(__name__)


def enable_now(units: Sequence[str], *, dry_run: bool = False) -> None:
    for unit in units:
        run_cmd(["systemctl", "enable", "--now", unit], dry_run=dry_run)
