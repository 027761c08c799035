"""Book scenarios against the mock bookstore API."""

import re

import pytest

from bookstore_apitests.context import ScenarioState
from bookstore_apitests.scenario import FailureKind
from bookstore_apitests.suites import SCENARIOS, book_catalog, book_lifecycle, get_scenario
from tests.mocks import MockBookstoreServer


@pytest.mark.cli_unit
class TestBookCatalog:
    """Read-only checks over the seeded catalog."""

    def test_seeded_catalog_passes(self, runner):
        result = runner.run(book_catalog())

        assert result.passed, result.message

    def test_missing_seeded_book(self, runner, mock_server):
        mock_server.books.clear()
        mock_server.add_book("Dune", "Frank Herbert", next(iter(mock_server.categories)))

        result = runner.run(book_catalog())

        assert result.failed_step.name == "find book by title"
        assert "Book with title The Great Gatsby does not exist" in result.message

    def test_wrong_author(self, runner, mock_server):
        for book in mock_server.books.values():
            book["author"] = "Someone Else"

        result = runner.run(book_catalog())

        assert result.failed_step.name == "find book by title"
        assert "Author is not as expected" in result.message

    def test_every_incomplete_book_is_reported(self, runner, mock_server):
        category_id = next(iter(mock_server.categories))
        mock_server.add_book("No Description", "A. Writer", category_id, description="")
        mock_server.add_book("No Pages", "B. Writer", category_id, pages=None)

        result = runner.run(book_catalog())

        assert result.failed_step.name == "list books have required fields"
        assert "2 check(s) failed in 'list books'" in result.message
        assert "description is not as expected" in result.message
        assert "pages is not as expected" in result.message

    def test_empty_catalog(self, client_factory, runner):
        client_factory.server = MockBookstoreServer(seed=False)

        result = runner.run(book_catalog())

        assert result.failed_step.name == "list books have required fields"
        assert "Books count is below 1" in result.message


@pytest.mark.cli_unit
class TestBookLifecycle:
    """create -> verify -> update -> verify -> delete -> verify absence."""

    def test_full_lifecycle_passes(self, runner, mock_server):
        result = runner.run(book_lifecycle())

        assert result.passed, result.message
        assert result.steps[1].name == "resolve category"
        assert result.steps[1].state is ScenarioState.AUTHENTICATED
        assert [s.state for s in result.steps][2:] == [
            ScenarioState.HAS_ENTITY,
            ScenarioState.VERIFIED,
            ScenarioState.UPDATED,
            ScenarioState.CONFIRMED,
            ScenarioState.DELETED,
            ScenarioState.DELETED,
        ]

    def test_book_references_first_category_and_is_removed(self, runner, mock_server):
        first_category = next(iter(mock_server.categories))

        result = runner.run(book_lifecycle())

        assert result.context.ids["category"] == first_category
        assert result.context.ids["book"] not in mock_server.books
        assert re.fullmatch(r"bookTitle_\d{3,4}Updated Book Title", result.context.values["title"])
        assert result.context.values["author"] == "Updated Author"
        assert [b["title"] for b in mock_server.books.values()] == ["The Great Gatsby"]

    def test_requires_an_existing_category(self, runner, mock_server):
        mock_server.clear()

        result = runner.run(book_lifecycle())

        assert result.failed_step.name == "resolve category"
        assert "No category exists" in result.message
        assert ("POST", "/book") not in mock_server.requests

    def test_dropped_update_reports_both_fields(self, runner, mock_server):
        mock_server.faults.ignore_updates = True

        result = runner.run(book_lifecycle())

        assert result.failed_step.name == "update book"
        assert "2 check(s) failed in 'update book'" in result.message
        assert "Updated title is not as expected" in result.message
        assert "Updated author is not as expected" in result.message

    def test_missing_from_listing_fails_verify(self, runner, mock_server):
        mock_server.faults.hide_from_listing = True

        result = runner.run(book_lifecycle())

        assert result.failed_step.name == "verify book created"
        assert "does not exist" in result.message

    def test_stale_read_after_delete_fails(self, runner, mock_server):
        mock_server.faults.stale_after_delete = True

        result = runner.run(book_lifecycle())

        assert result.failed_step.name == "verify book deleted"
        assert result.failure_kind is FailureKind.ASSERTION
        assert "Deleted book is still returned" in result.message


@pytest.mark.cli_unit
class TestRegistry:
    """Tests for the scenario registry."""

    def test_category_scenarios_run_before_book_lifecycle(self):
        assert list(SCENARIOS) == ["category-lifecycle", "book-catalog", "book-lifecycle"]

    def test_get_scenario(self):
        assert get_scenario("book-catalog").name == "book-catalog"

    def test_unknown_scenario(self):
        with pytest.raises(KeyError, match="Available: category-lifecycle"):
            get_scenario("author-lifecycle")

    def test_all_scenarios_pass_against_mock(self, runner):
        results = runner.run_all(SCENARIOS.values())

        assert [r.passed for r in results] == [True, True, True], [r.message for r in results]
