"""Per-scenario mutable state threaded through every step."""

import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .errors import SuiteError

# A Book or Category record as returned by the API; identity is "_id"
Entity = dict[str, Any]


class ScenarioState(str, Enum):
    """Lifecycle states of a scenario run."""

    INIT = "init"
    AUTHENTICATED = "authenticated"
    HAS_ENTITY = "has_entity"
    VERIFIED = "verified"
    UPDATED = "updated"
    CONFIRMED = "confirmed"
    DELETED = "deleted"
    PASSED = "passed"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (ScenarioState.PASSED, ScenarioState.FAILED)


@dataclass
class ScenarioContext:
    """State owned by one scenario run.

    Holds the bearer token, the ids of entities created so far (keyed by
    kind, e.g. "category", "book") and generated field values such as the
    current title, plus the random source used to generate them.
    """

    scenario: str
    token: str | None = None
    ids: dict[str, str] = field(default_factory=dict)
    values: dict[str, Any] = field(default_factory=dict)
    state: ScenarioState = ScenarioState.INIT
    rng: random.Random = field(default_factory=random.Random, repr=False)

    def remember_id(self, kind: str, entity_id: str) -> str:
        self.ids[kind] = entity_id
        return entity_id

    def require_id(self, kind: str) -> str:
        """Id captured by an earlier step.

        Raises:
            SuiteError: If no earlier step produced one
        """
        try:
            return self.ids[kind]
        except KeyError:
            raise SuiteError(
                f"No {kind} id in scenario '{self.scenario}'; an earlier step must create it"
            ) from None

    def require_value(self, name: str) -> Any:
        try:
            return self.values[name]
        except KeyError:
            raise SuiteError(
                f"No value '{name}' in scenario '{self.scenario}'"
            ) from None
