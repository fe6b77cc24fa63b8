from collections.abc import Callable
from dataclasses import dataclass, field
import logging
from typing import Any


logger = logging.getLogger(__name__)

Context = dict[str, Any]


@dataclass(frozen=True)
class SagaStep:
    name: str
    forward: Callable[[Context], Any]
    compensate: Callable[[Context, Any], None] | None = None
    essential: bool = True


@dataclass
class SagaResult:
    results: Context = field(default_factory=dict)
    failed_steps: dict[str, str] = field(default_factory=dict)

    def __getitem__(self, step_name: str) -> Any:
        return self.results[step_name]


class Saga:
    def __init__(self, name: str, steps: list[SagaStep] | None = None) -> None:
        self.name = name
        self.steps: list[SagaStep] = list(steps or [])

    def add(
        self,
        name: str,
        forward: Callable[[Context], Any],
        compensate: Callable[[Context, Any], None] | None = None,
        *,
        essential: bool = True,
    ) -> "Saga":
        self.steps.append(SagaStep(name, forward, compensate, essential))
        return self

    def run(self) -> SagaResult:
        result = SagaResult()
        completed: list[SagaStep] = []

        for step in self.steps:
            try:
                value = step.forward(result.results)
            except Exception as exc:
                if not step.essential:
                    result.failed_steps[step.name] = str(exc)
                    logger.warning(
                        "supplementary step failed",
                        extra={"saga": self.name, "step": step.name, "error": str(exc)},
                    )
                    continue
                logger.info(
                    "essential step failed, compensating",
                    extra={"saga": self.name, "step": step.name, "completed": [s.name for s in completed]},
                )
                self._compensate(completed, result.results)
                raise
            result.results[step.name] = value
            completed.append(step)

        return result

    def _compensate(self, completed: list[SagaStep], context: Context) -> None:
        for step in reversed(completed):
            if step.compensate is None:
                continue
            try:
                step.compensate(context, context.get(step.name))
                logger.info("compensated step", extra={"saga": self.name, "step": step.name})
            except Exception:
                # Not retried: the orphan is reported and left for manual cleanup.
                logger.exception("compensation failed", extra={"saga": self.name, "step": step.name})
