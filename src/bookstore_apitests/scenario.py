"""Ordered, stateful scenario runner.

A scenario is a fixed list of steps executed strictly in declared order.
Steps share one ScenarioContext: a create step stores the new entity id and
later steps read it back. The first failing step ends the scenario; nothing
after it runs. Each run opens its own client, authenticates once, and closes
the client whatever the outcome.
"""

import random
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .auth import authenticate
from .client import BookstoreClient
from .config import SuiteConfig
from .context import ScenarioContext, ScenarioState
from .errors import SetupError
from .shared.logging import get_logger

logger = get_logger(__name__)

StepAction = Callable[[BookstoreClient, ScenarioContext], None]
ClientFactory = Callable[[SuiteConfig], BookstoreClient]

AUTHENTICATE_STEP = "authenticate"


class FailureKind(str, Enum):
    """Why a scenario failed."""

    SETUP = "setup"
    ASSERTION = "assertion"
    ERROR = "error"


@dataclass(frozen=True)
class Step:
    """One named step; ``reaches`` is the state entered when it passes."""

    name: str
    action: StepAction
    reaches: ScenarioState | None = None


@dataclass(frozen=True)
class Scenario:
    """A fixed, ordered list of steps."""

    name: str
    steps: tuple[Step, ...]
    description: str = ""
    requires_auth: bool = True

    @property
    def step_names(self) -> list[str]:
        return [step.name for step in self.steps]


@dataclass
class StepResult:
    """Outcome of one step."""

    name: str
    passed: bool
    state: ScenarioState
    duration: float = 0.0
    kind: FailureKind | None = None
    message: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "passed": self.passed,
            "state": self.state.value,
            "duration": round(self.duration, 3),
            "kind": self.kind.value if self.kind else None,
            "message": self.message,
        }


@dataclass
class ScenarioResult:
    """Outcome of one scenario run."""

    scenario: str
    state: ScenarioState = ScenarioState.INIT
    steps: list[StepResult] = field(default_factory=list)
    duration: float = 0.0
    error: BaseException | None = field(default=None, repr=False)
    context: ScenarioContext | None = field(default=None, repr=False)

    @property
    def passed(self) -> bool:
        return self.state is ScenarioState.PASSED

    @property
    def failed_step(self) -> StepResult | None:
        for step in self.steps:
            if not step.passed:
                return step
        return None

    @property
    def failure_kind(self) -> FailureKind | None:
        step = self.failed_step
        return step.kind if step else None

    @property
    def message(self) -> str:
        step = self.failed_step
        if step is None:
            return ""
        return f"[{step.name}] {step.message}"

    def raise_for_failure(self) -> None:
        """Re-raise the exception that failed the scenario, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        return {
            "scenario": self.scenario,
            "passed": self.passed,
            "state": self.state.value,
            "duration": round(self.duration, 3),
            "failure_kind": self.failure_kind.value if self.failure_kind else None,
            "message": self.message,
            "steps": [step.to_dict() for step in self.steps],
        }


def default_client_factory(config: SuiteConfig) -> BookstoreClient:
    return BookstoreClient(config.base_url, timeout=config.timeout, insecure=config.insecure)


class ScenarioRunner:
    """Runs scenarios one at a time, each with a fresh context and client."""

    def __init__(
        self,
        config: SuiteConfig,
        client_factory: ClientFactory | None = None,
        seed: int | None = None,
    ):
        """Initialize runner.

        Args:
            config: Target environment and credentials
            client_factory: Builds the (unopened) client for each run
            seed: Seed for generated test data; random when omitted
        """
        self.config = config
        self.client_factory = client_factory or default_client_factory
        self.seed = seed

    def run(self, scenario: Scenario) -> ScenarioResult:
        """Run one scenario to PASSED or FAILED."""
        ctx = ScenarioContext(scenario=scenario.name, rng=random.Random(self.seed))
        result = ScenarioResult(scenario=scenario.name, context=ctx)
        log = logger.bind(scenario=scenario.name)
        log.info("scenario_started", steps=len(scenario.steps))
        started = time.monotonic()

        steps = list(scenario.steps)
        if scenario.requires_auth:
            steps.insert(0, Step(AUTHENTICATE_STEP, self._authenticate, ScenarioState.AUTHENTICATED))

        try:
            with self.client_factory(self.config) as client:
                for step in steps:
                    if not self._execute(step, client, ctx, result):
                        break
                else:
                    ctx.state = ScenarioState.PASSED
        except Exception as e:
            # Raised while opening or closing the client, outside any step
            self._record_failure(ctx, result, "client", e, 0.0)

        result.state = ctx.state
        result.duration = time.monotonic() - started
        if result.passed:
            log.info("scenario_passed", duration=round(result.duration, 3))
        else:
            log.warning(
                "scenario_failed",
                step=result.failed_step.name if result.failed_step else None,
                kind=result.failure_kind.value if result.failure_kind else None,
                duration=round(result.duration, 3),
            )
        return result

    def run_all(self, scenarios: Iterable[Scenario]) -> list[ScenarioResult]:
        """Run scenarios sequentially in the given order."""
        return [self.run(scenario) for scenario in scenarios]

    def _authenticate(self, client: BookstoreClient, ctx: ScenarioContext) -> None:
        ctx.token = authenticate(
            client,
            self.config.email,
            self.config.password,
            login_path=self.config.login_path,
        )

    def _execute(
        self,
        step: Step,
        client: BookstoreClient,
        ctx: ScenarioContext,
        result: ScenarioResult,
    ) -> bool:
        started = time.monotonic()
        try:
            step.action(client, ctx)
        except Exception as e:
            self._record_failure(ctx, result, step.name, e, time.monotonic() - started)
            return False

        if step.reaches is not None:
            ctx.state = step.reaches
        result.steps.append(
            StepResult(step.name, True, ctx.state, duration=time.monotonic() - started)
        )
        logger.debug("step_passed", scenario=ctx.scenario, step=step.name, state=ctx.state.value)
        return True

    def _record_failure(
        self,
        ctx: ScenarioContext,
        result: ScenarioResult,
        step_name: str,
        error: Exception,
        duration: float,
    ) -> None:
        if isinstance(error, SetupError):
            kind = FailureKind.SETUP
        elif isinstance(error, AssertionError):
            kind = FailureKind.ASSERTION
        else:
            kind = FailureKind.ERROR

        ctx.state = ScenarioState.FAILED
        result.error = error
        result.steps.append(
            StepResult(
                step_name,
                False,
                ctx.state,
                duration=duration,
                kind=kind,
                message=str(error) or type(error).__name__,
            )
        )
        if kind is FailureKind.ERROR:
            logger.exception("step_error", scenario=ctx.scenario, step=step_name)
        else:
            logger.info("step_failed", scenario=ctx.scenario, step=step_name, kind=kind.value)
