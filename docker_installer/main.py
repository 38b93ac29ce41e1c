from __future__ import annotations

import argparse
import logging
import os
from typing import Any, Dict, Optional

from .lib.command import CommandError
from .lib.env import PATHS
from .lib.users import current_user
from .logging_utils import configure_logging
from .pipeline import run_pipeline
from .state_store import ensure_defaults, save_report
from .steps import (
    PATH_INSTALLED_VERIFY,
    CheckComposeStep,
    ConfigureGroupStep,
    DetectDockerStep,
    EnableServicesStep,
    ExistingUserGroupStep,
    InstallComposeAurStep,
    InstallPackagesStep,
    ReportExistingStep,
    SmokeTestStep,
    SystemUpgradeStep,
    VerificationError,
    VerifyInstallStep,
)

logger = logging.getLogger(__name__)


def build_steps(path: str):
    if path == PATH_INSTALLED_VERIFY:
        return [
            ReportExistingStep(),
            CheckComposeStep(),
            ExistingUserGroupStep(),
        ]
    return [
        SystemUpgradeStep(),
        InstallPackagesStep(),
        EnableServicesStep(),
        InstallComposeAurStep(),
        ConfigureGroupStep(),
        VerifyInstallStep(),
        SmokeTestStep(),
    ]


def run(
    *,
    config: Optional[Dict[str, Any]] = None,
    log_path: str = PATHS.log_default,
    report_path: Optional[str] = None,
    log_level: int = logging.INFO,
) -> Dict[str, Any]:
    """Detect Docker, then either verify the existing install or install it."""

    configure_logging(log_path=log_path, level=log_level)

    state = ensure_defaults({"config": dict(config or {})})
    cfg = state["config"]
    if cfg.get("sudo_user") is None:
        cfg["sudo_user"] = os.environ.get("SUDO_USER") or None
    if not cfg.get("current_user"):
        cfg["current_user"] = current_user()

    try:
        state = run_pipeline(state=state, steps=[DetectDockerStep()]).state
        steps = build_steps(state["execution"]["path"])
        result = run_pipeline(state=state, steps=steps, skip=cfg.get("skip_steps") or [])
        state = result.state
        state["execution"]["skipped_steps"] = result.skipped_steps
        if SmokeTestStep.step_id in result.skipped_steps:
            state.setdefault("docker", {})["smoke_test"] = "skipped"
        logger.info("Finished (%s): ran %s", state["execution"]["path"], ", ".join(result.ran_steps) or "nothing")
        return state
    except Exception as e:
        logger.exception("Installer failed")
        state.setdefault("execution", {}).setdefault("errors", []).append(
            {
                "step": (state.get("execution") or {}).get("current_step"),
                "error": str(e),
            }
        )
        raise
    finally:
        if report_path:
            save_report(report_path, state)


def exit_code_for(exc: BaseException) -> int:
    # Package failures keep pacman's own exit status.
    if isinstance(exc, CommandError) and exc.returncode > 0:
        return exc.returncode
    return 1


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(
        prog="docker-installer",
        description="Install or verify Docker and Docker Compose on Arch Linux (run as root or via sudo).",
    )
    p.add_argument("--log", default=PATHS.log_default, help="Path to installer log")
    p.add_argument("--report", default=None, help="Write the run state to this file (.json|.yaml)")
    p.add_argument("--dry-run", action="store_true", help="Log commands without executing them")
    p.add_argument("--max-attempts", type=int, default=None, help="Pacman attempts before giving up")
    p.add_argument("--retry-wait", type=float, default=None, help="Seconds between pacman attempts")
    p.add_argument("--lock-path", default=None, help="Pacman db lock file to wait on")
    p.add_argument(
        "--skip",
        action="append",
        default=[],
        metavar="STEP_ID",
        help="Skip a step (e.g. 80_smoke_test); may be repeated",
    )
    p.add_argument("--debug", action="store_true", help="Log command output")

    args = p.parse_args(argv)

    config: Dict[str, Any] = {"dry_run": bool(args.dry_run), "skip_steps": list(args.skip)}
    if args.max_attempts is not None:
        if args.max_attempts < 1:
            p.error("--max-attempts must be at least 1")
        config["pacman_max_attempts"] = args.max_attempts
    if args.retry_wait is not None:
        if args.retry_wait < 0:
            p.error("--retry-wait must not be negative")
        config["pacman_retry_wait_s"] = args.retry_wait
    if args.lock_path:
        config["pacman_lock_path"] = args.lock_path

    try:
        run(
            config=config,
            log_path=args.log,
            report_path=args.report,
            log_level=logging.DEBUG if args.debug else logging.INFO,
        )
    except VerificationError:
        return 1
    except Exception as e:
        return exit_code_for(e)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
