"""Test mocks for bookstore-apitests.

Provides mock implementations for testing:
- MockBookstoreServer: Simulates the bookstore REST API in-process
"""

from .mock_bookstore_server import Faults, MockBookstoreServer

__all__ = ["Faults", "MockBookstoreServer"]
