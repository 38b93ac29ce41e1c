from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Protocol, Sequence

from .state_store import mark_step_completed

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single idempotent step."""

    step_id: str

    def run(self, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]


def run_pipeline(
    *,
    state: Dict[str, Any],
    steps: Sequence[Step],
    skip: Iterable[str] = (),
) -> PipelineResult:
    """Run steps in order. The first exception stops the pipeline."""

    ran: List[str] = []
    skipped: List[str] = []
    skip_ids = set(skip)

    for step in steps:
        state.setdefault("execution", {})["current_step"] = step.step_id

        if step.step_id in skip_ids:
            logger.info("Skipping step %s (requested)", step.step_id)
            skipped.append(step.step_id)
            continue

        logger.info("Running step %s", step.step_id)
        state = step.run(state)
        mark_step_completed(state, step.step_id)
        ran.append(step.step_id)

    state.setdefault("execution", {})["current_step"] = None
    return PipelineResult(state=state, ran_steps=ran, skipped_steps=skipped)
