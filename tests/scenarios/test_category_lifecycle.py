"""Category lifecycle against the live bookstore API."""

import pytest

from bookstore_apitests.suites import category_lifecycle


@pytest.mark.scenario
class TestCategoryLifecycle:
    """Create, list, update, verify, delete and verify absence of a category."""

    def test_category_lifecycle(self, live_runner):
        result = live_runner.run(category_lifecycle())

        result.raise_for_failure()
        assert result.passed
