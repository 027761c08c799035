"""Shared test fixtures for bookstore-apitests tests.

This module provides fixtures for testing the suite without a live API:
- mock_server: in-process bookstore API (tests/mocks)
- api: an open BookstoreClient bound to the mock server
- runner: a ScenarioRunner whose clients all talk to the mock server
"""

from collections.abc import Generator

import pytest

from bookstore_apitests.client import BookstoreClient
from bookstore_apitests.config import SuiteConfig
from bookstore_apitests.scenario import ScenarioRunner
from tests.mocks import MockBookstoreServer

MOCK_BASE_URL = "http://testserver"


class RecordingClientFactory:
    """Client factory that keeps every client it built, for lifecycle checks."""

    def __init__(self, server: MockBookstoreServer):
        self.server = server
        self.clients: list[BookstoreClient] = []

    def __call__(self, config: SuiteConfig) -> BookstoreClient:
        client = BookstoreClient(
            config.base_url,
            timeout=config.timeout,
            http_client=self.server.get_test_client(),
        )
        self.clients.append(client)
        return client


@pytest.fixture
def mock_server() -> MockBookstoreServer:
    """Seeded mock bookstore API."""
    return MockBookstoreServer()


@pytest.fixture
def suite_config() -> SuiteConfig:
    """Config pointing at the mock server with its default credentials."""
    return SuiteConfig(base_url=MOCK_BASE_URL)


@pytest.fixture
def client_factory(mock_server: MockBookstoreServer) -> RecordingClientFactory:
    return RecordingClientFactory(mock_server)


@pytest.fixture
def runner(suite_config: SuiteConfig, client_factory: RecordingClientFactory) -> ScenarioRunner:
    """Runner with a fixed seed so generated titles are reproducible."""
    return ScenarioRunner(suite_config, client_factory=client_factory, seed=4821)


@pytest.fixture
def api(mock_server: MockBookstoreServer) -> Generator[BookstoreClient, None, None]:
    """Open client bound to the mock server."""
    with BookstoreClient(MOCK_BASE_URL, http_client=mock_server.get_test_client()) as client:
        yield client


@pytest.fixture
def token(api: BookstoreClient, mock_server: MockBookstoreServer) -> str:
    """Valid bearer token for the mock server."""
    return api.post("/users/login", json=mock_server.credentials).json()["token"]
