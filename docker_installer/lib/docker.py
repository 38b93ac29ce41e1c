from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Literal, Optional

from .command import command_exists, run_cmd

logger = logging.getLogger(__name__)

ComposeKind = Literal["plugin", "standalone"]


@dataclass(frozen=True)
class ComposeInfo:
    kind: ComposeKind
    version: str


def docker_installed() -> bool:
    return command_exists("docker")


def docker_version(*, dry_run: bool = False) -> str:
    r = run_cmd(["docker", "--version"], dry_run=dry_run)
    return r.stdout.strip()


def detect_compose(*, dry_run: bool = False) -> Optional[ComposeInfo]:
    """Find Docker Compose, preferring the CLI plugin over the standalone binary."""

    r = run_cmd(["docker", "compose", "version"], check=False, dry_run=dry_run)
    if r.ok:
        return ComposeInfo(kind="plugin", version=r.stdout.strip())

    if command_exists("docker-compose"):
        r = run_cmd(["docker-compose", "--version"], dry_run=dry_run)
        return ComposeInfo(kind="standalone", version=r.stdout.strip())

    return None


def run_smoke_test(image: str = "hello-world", *, dry_run: bool = False) -> bool:
    r = run_cmd(["docker", "run", "--rm", image], check=False, dry_run=dry_run)
    return r.ok
