from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, List, Optional, Tuple

from .config import Step
from .connectors.base import DesktopConnector
from .interaction.resolver import ElementResolver, Strategy

logger = logging.getLogger("manuscript.runner")


class Action(str, Enum):
    ENTERED = "entered"
    FAILED_TO_ENTER = "failed_to_enter"
    SKIPPED = "skipped"
    READ = "read"
    NOT_FOUND = "not_found"


FAILURES = frozenset({Action.FAILED_TO_ENTER, Action.NOT_FOUND})


@dataclass(frozen=True)
class StepOutcome:
    target: str
    action: Action
    strategy: Optional[Strategy] = None
    value: Optional[str] = None

    @property
    def failed(self) -> bool:
        return self.action in FAILURES


@dataclass(frozen=True)
class ExecutionReport:
    outcomes: Tuple[StepOutcome, ...]

    @property
    def total(self) -> int:
        return len(self.outcomes)

    @property
    def fail_count(self) -> int:
        return sum(1 for o in self.outcomes if o.failed)

    @property
    def success_count(self) -> int:
        return self.total - self.fail_count

    @property
    def ok(self) -> bool:
        return self.fail_count == 0

    @property
    def exit_code(self) -> int:
        return 0 if self.ok else 1

    def count(self, action: Action) -> int:
        return sum(1 for o in self.outcomes if o.action is action)

    def summary(self) -> str:
        return f"Total Steps: {self.total} | Success: {self.success_count} | Failed: {self.fail_count}"


class StepExecutor:
    def __init__(self, connector: DesktopConnector, resolver: Optional[ElementResolver] = None, on_outcome: Optional[Callable[[StepOutcome], None]] = None) -> None:
        self.conn = connector
        self.resolver = resolver or ElementResolver(connector)
        self.on_outcome = on_outcome

    def run_step(self, root: Any, step: Step) -> StepOutcome:
        found = self.resolver.resolve(root, step.target, intended_value=step.value)
        if found is None:
            return StepOutcome(step.target, Action.NOT_FOUND)
        if not step.writes:
            return StepOutcome(step.target, Action.READ, found.strategy, self.conn.value_or_description(found.node))
        if found.already_filled:
            return StepOutcome(step.target, Action.SKIPPED, found.strategy, step.value)
        if self.conn.set_value(found.node, step.value):
            return StepOutcome(step.target, Action.ENTERED, found.strategy, step.value)
        logger.debug("set_value rejected for %r", step.target)
        return StepOutcome(step.target, Action.FAILED_TO_ENTER, found.strategy, step.value)

    def execute(self, root: Any, steps: Iterable[Step]) -> ExecutionReport:
        outcomes: List[StepOutcome] = []
        for step in steps:
            outcome = self.run_step(root, step)
            outcomes.append(outcome)
            if self.on_outcome is not None:
                self.on_outcome(outcome)
        report = ExecutionReport(tuple(outcomes))
        logger.debug(report.summary())
        return report
