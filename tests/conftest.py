from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional, Tuple

import pytest

from docker_installer.lib import command, pacman, users

DOCKER_VERSION = "Docker version 27.3.1, build ce12230"
COMPOSE_PLUGIN_VERSION = "Docker Compose version 2.29.7"
COMPOSE_STANDALONE_VERSION = "docker-compose version 1.29.2, build unknown"


class FakeHost:
    """Stands in for the Arch host behind run_cmd/command_exists.

    Commands are answered from a small model of the system: pacman installs
    put binaries on PATH, makepkg provides yay, usermod edits groups.
    """

    def __init__(self, lock_path: Path) -> None:
        self.lock_path = lock_path
        self.binaries: set[str] = {"pacman", "git", "systemctl", "usermod", "id"}
        self.users: Dict[str, set[str]] = {"root": {"root"}}
        self.compose_plugin = False
        self.smoke_ok = True
        self.calls: List[List[str]] = []
        self.cwds: List[Optional[str]] = []
        self.sleeps: List[float] = []
        self.on_sleep: Optional[Callable[[int], None]] = None
        self.overrides: Dict[Tuple[str, ...], Tuple[int, str]] = {}
        self.login = "root"

    # -- configuration helpers -------------------------------------------

    def add_user(self, name: str, *groups: str) -> None:
        self.users[name] = {name, *groups}

    def fail(self, *prefix: str, rc: int = 1, stdout: str = "") -> None:
        self.overrides[tuple(prefix)] = (rc, stdout)

    def install_docker(self, *, compose_plugin: bool = False, standalone: bool = False) -> None:
        self.binaries.add("docker")
        self.compose_plugin = compose_plugin
        if standalone:
            self.binaries.add("docker-compose")

    def lock(self) -> None:
        self.lock_path.write_text("", encoding="utf-8")

    def unlock(self) -> None:
        if self.lock_path.exists():
            self.lock_path.unlink()

    def ran(self, *prefix: str) -> List[List[str]]:
        return [c for c in self.calls if tuple(c[: len(prefix)]) == prefix]

    # -- patched entrypoints ---------------------------------------------

    def which(self, name: str) -> Optional[str]:
        return f"/usr/bin/{name}" if name in self.binaries else None

    def getuser(self) -> str:
        return self.login

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        if self.on_sleep is not None:
            self.on_sleep(len(self.sleeps))

    def run(self, argv, **kwargs) -> subprocess.CompletedProcess:
        argv = list(argv)
        self.calls.append(argv)
        self.cwds.append(kwargs.get("cwd"))
        rc, out = self._answer(argv)
        return subprocess.CompletedProcess(argv, rc, out, "" if rc == 0 else "simulated failure")

    def _answer(self, argv: List[str]) -> Tuple[int, str]:
        for n in range(len(argv), 0, -1):
            hit = self.overrides.get(tuple(argv[:n]))
            if hit is not None:
                return hit

        head = argv[0]
        if head == "pacman":
            if argv[1] == "-S":
                for pkg in argv[2:]:
                    if pkg in {"docker", "docker-compose"}:
                        self.binaries.add(pkg)
            return 0, ""
        if head == "makepkg":
            self.binaries.add("yay")
            return 0, ""
        if head == "id":
            user = argv[-1]
            if user not in self.users:
                return 1, ""
            if argv[1] == "-nG":
                return 0, " ".join(sorted(self.users[user])) + "\n"
            return 0, "1000\n"
        if head == "usermod":
            self.users[argv[-1]].add(argv[2])
            return 0, ""
        if argv[:3] == ["docker", "compose", "version"]:
            return (0, COMPOSE_PLUGIN_VERSION + "\n") if self.compose_plugin else (1, "")
        if argv[:2] == ["docker", "--version"]:
            return 0, DOCKER_VERSION + "\n"
        if argv[:2] == ["docker-compose", "--version"]:
            return 0, COMPOSE_STANDALONE_VERSION + "\n"
        if argv[:2] == ["docker", "run"]:
            return (0, "Hello from Docker!\n") if self.smoke_ok else (125, "")
        return 0, ""


@pytest.fixture
def host(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> FakeHost:
    h = FakeHost(tmp_path / "db.lck")
    monkeypatch.setattr(command, "subprocess", SimpleNamespace(run=h.run, PIPE=subprocess.PIPE))
    monkeypatch.setattr(command, "shutil", SimpleNamespace(which=h.which))
    monkeypatch.setattr(users, "getpass", SimpleNamespace(getuser=h.getuser))
    monkeypatch.setattr(pacman, "time", SimpleNamespace(sleep=h.sleep))
    monkeypatch.delenv("SUDO_USER", raising=False)
    return h


@pytest.fixture(autouse=True)
def _reset_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)
    for attr in ("_docker_installer_configured", "_docker_installer_log_path"):
        if hasattr(root, attr):
            delattr(root, attr)
