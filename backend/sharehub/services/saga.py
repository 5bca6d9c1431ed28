"""Saga Runner — ordered (action, compensation) steps across independent stores.

Invariants:
    - Steps run strictly in list order; each action sees the results of earlier steps
    - A failing required step compensates every completed required step in
      reverse order, then re-raises the ORIGINAL error
    - A failing compensation is logged and never replaces the original error
    - A failing best-effort step (required=False) is logged and skipped;
      best-effort steps are never compensated

Design Decisions:
    - Required vs best-effort is a flag on the step, not a try/except choice at
      each call site: creation, claiming, editing and cascade deletion all
      declare their steps and share this one rollback path
    - No persisted saga log: a crash mid-saga is repaired lazily by the
      idempotent cleanup paths (cascade deletion, expiration sweep)
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

StepAction = Callable[[dict[str, Any]], Awaitable[Any]]
StepCompensation = Callable[[Any], Awaitable[None]]


@dataclass(frozen=True)
class SagaStep:
    """One write in a multi-store workflow."""
    name: str
    action: StepAction
    compensation: StepCompensation | None = None
    required: bool = True


@dataclass
class SagaOutcome:
    """Results keyed by step name, plus best-effort steps that failed."""
    results: dict[str, Any] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


async def run_saga(
    saga: str, steps: list[SagaStep], log_extra: dict | None = None,
) -> SagaOutcome:
    """Run steps in order; compensate and re-raise on required-step failure."""
    outcome = SagaOutcome()
    completed: list[tuple[SagaStep, Any]] = []
    extra = log_extra or {}

    for step in steps:
        try:
            result = await step.action(outcome.results)
        except Exception as e:
            if not step.required:
                logger.warning(
                    f"{saga}: best-effort step '{step.name}' failed: {e}",
                    extra={**extra, "step": step.name}, exc_info=True,
                )
                outcome.skipped.append(step.name)
                continue
            logger.error(
                f"{saga}: step '{step.name}' failed, compensating "
                f"{len(completed)} completed step(s): {e}",
                extra={**extra, "step": step.name},
            )
            await _compensate(saga, completed, extra)
            raise
        outcome.results[step.name] = result
        if step.required:
            completed.append((step, result))

    return outcome


async def _compensate(
    saga: str, completed: list[tuple[SagaStep, Any]], extra: dict,
) -> None:
    for step, result in reversed(completed):
        if step.compensation is None:
            continue
        try:
            await step.compensation(result)
            logger.info(
                f"{saga}: rolled back step '{step.name}'",
                extra={**extra, "step": step.name},
            )
        except Exception as e:
            logger.error(
                f"{saga}: rollback of step '{step.name}' failed: {e}",
                extra={**extra, "step": step.name}, exc_info=True,
            )
