from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Protocol, Sequence

from .context import InstallCtx
from .state_store import clear_step_completed, is_step_completed, mark_step_completed, warnings_for

logger = logging.getLogger(__name__)


class Step(Protocol):
    """A single install step; safe to re-run."""

    step_id: str

    def run(self, ctx: InstallCtx, state: Dict[str, Any]) -> Dict[str, Any]:
        ...


@dataclass(frozen=True)
class PipelineResult:
    state: Dict[str, Any]
    ran_steps: List[str]
    skipped_steps: List[str]
    degraded_steps: List[str] = field(default_factory=list)
    # Set when stop_after ended the run before the last step.
    stopped_after: Optional[str] = None

    @property
    def partial(self) -> bool:
        return self.stopped_after is not None


def run_pipeline(
    *,
    ctx: InstallCtx,
    state: Dict[str, Any],
    steps: Sequence[Step],
    start_at: Optional[str] = None,
    stop_after: Optional[str] = None,
    resume: bool = False,
) -> PipelineResult:
    """Run every step in order; the first exception aborts the run.

    Only steps that finished without recording a warning are marked
    completed, so a degraded step is retried by a later --resume run.
    With resume=False (the default) completed steps run again.
    """

    ran: List[str] = []
    skipped: List[str] = []
    degraded: List[str] = []
    stopped: Optional[str] = None

    started = start_at is None
    exe = state.setdefault("execution", {})

    for index, step in enumerate(steps):
        if not started:
            if step.step_id != start_at:
                continue
            started = True

        exe["current_step"] = step.step_id

        if resume and is_step_completed(state, step.step_id):
            logger.info("Skipping step %s (completed in an earlier run)", step.step_id)
            skipped.append(step.step_id)
        else:
            logger.info("Running step %s", step.step_id)
            state = step.run(ctx, state)
            exe = state.setdefault("execution", {})
            ran.append(step.step_id)
            if warnings_for(state, step.step_id):
                logger.info("Step %s degraded; not marking it completed", step.step_id)
                degraded.append(step.step_id)
                clear_step_completed(state, step.step_id)
            else:
                mark_step_completed(state, step.step_id)

        if stop_after is not None and step.step_id == stop_after:
            if index < len(steps) - 1:
                logger.info("Stopping after %s", stop_after)
                stopped = step.step_id
            break

    exe["current_step"] = None
    return PipelineResult(
        state=state,
        ran_steps=ran,
        skipped_steps=skipped,
        degraded_steps=degraded,
        stopped_after=stopped,
    )
