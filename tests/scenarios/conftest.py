"""Shared fixtures for live scenario tests."""

import time

import httpx
import pytest

from bookstore_apitests.config import SuiteConfig, load_config
from bookstore_apitests.scenario import ScenarioRunner


def wait_for_api(url: str, timeout: int = 10) -> bool:
    """Wait for the bookstore API to answer the category listing."""
    start = time.time()
    while time.time() - start < timeout:
        try:
            response = httpx.get(f"{url}/category", timeout=5)
            if response.status_code == 200:
                return True
        except httpx.HTTPError:
            pass
        time.sleep(2)
    return False


@pytest.fixture(scope="module")
def live_config() -> SuiteConfig:
    """Suite config for the live API. Skips if the API is unreachable."""
    config = load_config()
    if not wait_for_api(config.base_url.rstrip("/")):
        pytest.skip(f"Bookstore API not reachable at {config.base_url}. Set BOOKSTORE_BASE_URL.")
    return config


@pytest.fixture
def live_runner(live_config: SuiteConfig) -> ScenarioRunner:
    """Fresh runner per test; every scenario opens its own client and token."""
    return ScenarioRunner(live_config)
