"""Response assertions.

Module-level checks fail fast: each raises ScenarioAssertionError on the
first mismatch. AssertionGroup exposes the same checks as methods but records
every outcome and raises a single aggregate error when the block ends:

    with soft_assertions("list categories") as group:
        group.status_is(response, 200, "Status code is not as expected")
        categories = group.is_array(group.json_body(response, "..."), "...")
"""

from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from .client import ApiResponse
from .errors import AssertionOutcome, ScenarioAssertionError

T = TypeVar("T")


def _fail(description: str, expected: Any, actual: Any) -> ScenarioAssertionError:
    message = f"{description}: expected {expected!r}, got {actual!r}"
    return ScenarioAssertionError([AssertionOutcome(description, False, message)])


def _preview(text: str, limit: int = 120) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


def status_is(response: ApiResponse, expected: int, description: str) -> ApiResponse:
    """Check the status code of a response."""
    if response.status_code != expected:
        raise _fail(
            f"{description} ({response.method} {response.path})",
            expected,
            response.status_code,
        )
    return response


def equals(actual: T, expected: Any, description: str) -> T:
    if actual != expected:
        raise _fail(description, expected, actual)
    return actual


def not_empty(value: T, description: str) -> T:
    """Check that a value is neither None nor empty (string, list or dict)."""
    if value is None or (isinstance(value, (str, list, dict)) and len(value) == 0):
        raise _fail(description, "a non-empty value", value)
    return value


def is_present(value: T, description: str) -> T:
    """Check that a value is not None. Zero and False count as present."""
    if value is None:
        raise _fail(description, "a value", None)
    return value


def is_array(value: Any, description: str) -> list[Any]:
    if not isinstance(value, list):
        raise _fail(description, "array", type(value).__name__)
    return value


def is_object(value: Any, description: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise _fail(description, "object", type(value).__name__)
    return value


def greater_than(actual: Any, bound: Any, description: str) -> Any:
    if actual is None or not actual > bound:
        raise _fail(description, f"> {bound!r}", actual)
    return actual


def contains(
    items: Iterable[T], predicate: Callable[[T], bool], description: str
) -> T:
    """Return the first item matching ``predicate``, failing when none does."""
    if items is None:
        raise _fail(description, "a matching item", None)
    for item in items:
        if predicate(item):
            return item
    raise _fail(description, "a matching item", None)


def json_body(response: ApiResponse, description: str) -> Any:
    """Parse the response body as JSON, failing when it is not JSON."""
    if not response.text.strip():
        raise _fail(description, "a non-empty body", response.text)
    try:
        return response.json()
    except ValueError:
        raise _fail(description, "a JSON body", _preview(response.text)) from None


def is_absent(response: ApiResponse, description: str) -> ApiResponse:
    """Check that the body is the literal ``null`` absence marker."""
    if not response.is_absent:
        raise _fail(
            f"{description} ({response.method} {response.path})",
            "null",
            _preview(response.text),
        )
    return response


def field(entity: Any, name: str) -> Any:
    """Read ``name`` from a JSON object, None when missing or not an object."""
    if isinstance(entity, dict):
        return entity.get(name)
    return None


def text_field(entity: Any, name: str) -> str | None:
    """Read ``name`` as a string, the way the API's ids and titles compare."""
    value = field(entity, name)
    return None if value is None else str(value)


# -----------------------------------------------------------------------------
# Grouped (soft) assertions
# -----------------------------------------------------------------------------


class AssertionGroup:
    """Collects check outcomes and reports all failures together."""

    def __init__(self, name: str | None = None):
        self.name = name
        self.outcomes: list[AssertionOutcome] = []

    def __enter__(self) -> "AssertionGroup":
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if exc_type is None:
            self.verify()
            return
        # Errors that end a block with nothing recorded propagate unchanged
        if not self.failures:
            return
        if isinstance(exc_val, ScenarioAssertionError):
            # A hard check failed inside the block
            raise ScenarioAssertionError(self.failures + exc_val.failures, group=self.name) from None
        error = AssertionOutcome(
            "unexpected error", False, f"unexpected error: {exc_type.__name__}: {exc_val}"
        )
        raise ScenarioAssertionError(self.failures + [error], group=self.name) from exc_val

    @property
    def failures(self) -> list[AssertionOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.passed]

    def verify(self) -> None:
        """Raise one ScenarioAssertionError listing every recorded failure."""
        failures = self.failures
        if failures:
            raise ScenarioAssertionError(failures, group=self.name)

    def _run(self, check: Callable[..., Any], description: str, *args: Any) -> Any:
        try:
            result = check(*args, description)
        except ScenarioAssertionError as e:
            self.outcomes.extend(e.failures)
            return None
        self.outcomes.append(AssertionOutcome(description, True))
        return result

    def status_is(self, response: ApiResponse, expected: int, description: str) -> ApiResponse | None:
        return self._run(status_is, description, response, expected)

    def equals(self, actual: Any, expected: Any, description: str) -> Any:
        return self._run(equals, description, actual, expected)

    def not_empty(self, value: Any, description: str) -> Any:
        return self._run(not_empty, description, value)

    def is_present(self, value: Any, description: str) -> Any:
        return self._run(is_present, description, value)

    def is_array(self, value: Any, description: str) -> list[Any] | None:
        return self._run(is_array, description, value)

    def is_object(self, value: Any, description: str) -> dict[str, Any] | None:
        return self._run(is_object, description, value)

    def greater_than(self, actual: Any, bound: Any, description: str) -> Any:
        return self._run(greater_than, description, actual, bound)

    def contains(self, items: Iterable[Any], predicate: Callable[[Any], bool], description: str) -> Any:
        return self._run(contains, description, items, predicate)

    def json_body(self, response: ApiResponse, description: str) -> Any:
        return self._run(json_body, description, response)

    def is_absent(self, response: ApiResponse, description: str) -> ApiResponse | None:
        return self._run(is_absent, description, response)


def soft_assertions(name: str | None = None) -> AssertionGroup:
    """Start an assertion group; use as a context manager."""
    return AssertionGroup(name)
