"""Error taxonomy for scenario runs.

Three kinds of failure end a scenario:
- setup: login failed or produced no token (SetupError)
- assertion: an observed value diverged from the expected one
  (ScenarioAssertionError)
- error: transport problems and anything else uncategorised (TransportError
  and unexpected exceptions)
"""

from dataclasses import dataclass, field
from typing import Any, NamedTuple


class AssertionOutcome(NamedTuple):
    """Result of one check inside an assertion group."""

    description: str
    passed: bool
    message: str = ""


@dataclass
class SuiteError(Exception):
    """Base error class for suite errors."""

    message: str
    data: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        return self.message


@dataclass
class SetupError(SuiteError):
    """Scenario precondition failed (login rejected, empty token)."""


@dataclass
class ClientError(SuiteError):
    """HTTP client used incorrectly or unable to complete a call."""


@dataclass
class TransportError(ClientError):
    """Network or timeout error while talking to the bookstore API."""

    method: str = ""
    url: str = ""
    is_timeout: bool = False


class ScenarioAssertionError(AssertionError):
    """One or more checks failed.

    Subclasses AssertionError so pytest reports it as a regular test failure.
    """

    def __init__(self, failures: list[AssertionOutcome], group: str | None = None):
        self.failures = list(failures)
        self.group = group
        super().__init__(self._format())

    def _format(self) -> str:
        if len(self.failures) == 1 and not self.group:
            return self.failures[0].message
        header = f"{len(self.failures)} check(s) failed"
        if self.group:
            header = f"{header} in '{self.group}'"
        lines = [f"{header}:"]
        lines.extend(f"  - {outcome.message}" for outcome in self.failures)
        return "\n".join(lines)

    @property
    def message(self) -> str:
        return str(self)


def map_transport_error(error: Exception, method: str, url: str) -> TransportError:
    """Map an httpx transport exception to TransportError.

    Args:
        error: Exception raised by the transport
        method: HTTP method of the failed call
        url: URL that was being accessed

    Returns:
        TransportError describing the failure
    """
    import httpx

    if isinstance(error, httpx.TimeoutException):
        return TransportError(
            message=f"Request timeout: {method} {url}",
            method=method,
            url=url,
            is_timeout=True,
            data={"original_error": str(error)},
        )

    from urllib.parse import urlparse

    parsed = urlparse(url)
    host_port = f"{parsed.hostname}:{parsed.port}" if parsed.port else parsed.hostname
    return TransportError(
        message=f"Cannot reach bookstore API at {host_port}: {error}",
        method=method,
        url=url,
        data={"original_error": str(error)},
    )
