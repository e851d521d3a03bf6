from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[bool]]
Compensation = Callable[[], Awaitable[None]]
Hook = Callable[[], Awaitable[None]]


@dataclass(slots=True)
class SagaStep:
    name: str
    action: Action
    compensate: Compensation


@dataclass(slots=True)
class SagaResult:
    applied: list[str] = field(default_factory=list)

    def did(self, step_name: str) -> bool:
        return step_name in self.applied


class Saga:
    """
    Ordered list of (action, compensation) pairs executed without a shared transaction.

    Each action returns whether it changed durable state. A step counts as
    completed once its action reported a change and the checkpoint (commit)
    succeeded. When a step fails, ``on_failure`` discards the in-flight work
    and completed steps are compensated in reverse order. Compensations are
    independent: a failing one is logged and the unwind moves on. The original
    exception is re-raised afterwards. Cancellation of the running step is
    treated the same way.
    """

    def __init__(
        self,
        *,
        checkpoint: Hook | None = None,
        on_failure: Hook | None = None,
    ) -> None:
        self._steps: list[SagaStep] = []
        self._checkpoint = checkpoint
        self._on_failure = on_failure

    def add_step(self, name: str, action: Action, compensate: Compensation) -> Saga:
        self._steps.append(SagaStep(name=name, action=action, compensate=compensate))
        return self

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self._steps]

    async def run(self) -> SagaResult:
        result = SagaResult()
        completed: list[SagaStep] = []
        for step in self._steps:
            try:
                applied = await step.action()
                if applied and self._checkpoint is not None:
                    await self._checkpoint()
            except (Exception, asyncio.CancelledError) as exc:
                # Cancellation (timeouts, dropped clients) unwinds like any other failure
                logger.error(
                    "Saga step '%s' failed, compensating %d completed step(s): %s",
                    step.name,
                    len(completed),
                    exc,
                    exc_info=True,
                )
                await self._discard_in_flight()
                await self._compensate(completed)
                raise
            if applied:
                completed.append(step)
                result.applied.append(step.name)
        return result

    async def _discard_in_flight(self) -> None:
        if self._on_failure is None:
            return
        try:
            await self._on_failure()
        except Exception as exc:
            logger.error("Failed to discard in-flight saga work: %s", exc)

    async def _compensate(self, completed: list[SagaStep]) -> None:
        failures = 0
        for step in reversed(completed):
            try:
                await step.compensate()
                if self._checkpoint is not None:
                    await self._checkpoint()
                logger.info("Compensated saga step '%s'", step.name)
            except Exception as exc:
                failures += 1
                logger.error("Compensation for step '%s' failed: %s", step.name, exc, exc_info=True)
                await self._discard_in_flight()
        if failures:
            logger.warning(
                "Saga unwind finished with %d failed compensation(s) out of %d",
                failures,
                len(completed),
            )
        elif completed:
            logger.warning("Saga unwind completed for %d step(s)", len(completed))
