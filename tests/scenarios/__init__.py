"""Live scenario tests for bookstore-apitests.

These tests run the registered scenarios against a real bookstore API at
BOOKSTORE_BASE_URL. They are skipped when the API is unreachable.

The target environment must already contain at least one category and the
book "The Great Gatsby" by F. Scott Fitzgerald.
"""
