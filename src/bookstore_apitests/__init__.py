"""bookstore-apitests - End-to-end CRUD scenarios for the bookstore REST API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bookstore-apitests")
except PackageNotFoundError:
    __version__ = "0.0.0.dev0"  # Fallback for editable installs without metadata

from .client import ApiResponse, BookstoreClient
from .config import SuiteConfig, load_config
from .scenario import Scenario, ScenarioResult, ScenarioRunner, Step
from .suites import SCENARIOS, get_scenario

__all__ = [
    "ApiResponse",
    "BookstoreClient",
    "SCENARIOS",
    "Scenario",
    "ScenarioResult",
    "ScenarioRunner",
    "Step",
    "SuiteConfig",
    "__version__",
    "get_scenario",
    "load_config",
]
