from __future__ import annotations

import pytest

from docker_installer.pipeline import run_pipeline
from docker_installer.state_store import ensure_defaults, save_report


class _Record:
    def __init__(self, step_id, fail=False):
        self.step_id = step_id
        self.fail = fail

    def run(self, state):
        if self.fail:
            raise RuntimeError(f"{self.step_id} broke")
        state.setdefault("seen", []).append(self.step_id)
        return state


def test_runs_in_order_and_honours_skip():
    state = ensure_defaults({})
    result = run_pipeline(state=state, steps=[_Record("a"), _Record("b"), _Record("c")], skip=["b"])

    assert result.ran_steps == ["a", "c"]
    assert result.skipped_steps == ["b"]
    assert state["seen"] == ["a", "c"]
    assert state["execution"]["completed_steps"] == ["a", "c"]
    assert state["execution"]["current_step"] is None


def test_first_failure_stops_the_pipeline():
    state = ensure_defaults({})

    with pytest.raises(RuntimeError, match="b broke"):
        run_pipeline(state=state, steps=[_Record("a"), _Record("b", fail=True), _Record("c")])

    assert state["seen"] == ["a"]
    assert state["execution"]["current_step"] == "b"


def test_defaults_do_not_override_explicit_config():
    state = ensure_defaults({"config": {"pacman_max_attempts": 3}})

    assert state["config"]["pacman_max_attempts"] == 3
    assert state["config"]["packages"] == ["docker", "docker-compose", "containerd", "runc"]
    assert state["config"]["services"] == ["docker.service", "containerd.service"]


def test_report_format_follows_extension(tmp_path):
    state = ensure_defaults({})

    save_report(str(tmp_path / "out" / "r.json"), state)
    save_report(str(tmp_path / "r.yml"), state)
    save_report(str(tmp_path / "r.txt"), state)

    assert (tmp_path / "out" / "r.json").read_text(encoding="utf-8").startswith("{")
    assert (tmp_path / "r.yml").read_text(encoding="utf-8").startswith("config:")
    assert (tmp_path / "r.txt").read_text(encoding="utf-8").startswith("{")
