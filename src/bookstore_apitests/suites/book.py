"""Book scenarios.

book-catalog is read-only and relies on seeded data in the target
environment ("The Great Gatsby" by F. Scott Fitzgerald). book-lifecycle
borrows an existing category as the book's foreign key, so at least one
category must exist before it runs.
"""

from typing import Any

from .. import assertions as check
from ..client import BookstoreClient
from ..context import ScenarioContext, ScenarioState
from ..data import new_book
from ..scenario import Scenario, Step
from .category import CATEGORY_PATH

BOOK_PATH = "/book"

SEEDED_TITLE = "The Great Gatsby"
SEEDED_AUTHOR = "F. Scott Fitzgerald"

UPDATED_TITLE_SUFFIX = "Updated Book Title"
UPDATED_AUTHOR = "Updated Author"

REQUIRED_TEXT_FIELDS = ("title", "author", "description")
REQUIRED_FIELDS = ("price", "pages", "category")


def book_path(book_id: str) -> str:
    return f"{BOOK_PATH}/{book_id}"


def nested_id(entity: Any, name: str) -> str | None:
    """Id of a populated reference such as ``book["category"]["_id"]``."""
    value = check.field(entity, name)
    if isinstance(value, dict):
        return check.text_field(value, "_id")
    return None if value is None else str(value)


# -----------------------------------------------------------------------------
# book-catalog
# -----------------------------------------------------------------------------


def list_books_have_required_fields(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(BOOK_PATH)

    with check.soft_assertions("list books") as group:
        group.status_is(response, 200, "Response does not have correct status code")
        group.not_empty(response.text, "Response content is not as expected")
        books = group.is_array(group.json_body(response, "Response content is not JSON"),
                               "The response content is not array")
        group.greater_than(len(books) if books is not None else None, 0, "Books count is below 1")
        for index, book in enumerate(books or []):
            label = check.text_field(book, "_id") or f"#{index}"
            for name in REQUIRED_TEXT_FIELDS:
                group.not_empty(check.text_field(book, name), f"Book {label}: {name} is not as expected")
            for name in REQUIRED_FIELDS:
                group.is_present(check.field(book, name), f"Book {label}: {name} is not as expected")


def find_seeded_book(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(BOOK_PATH)

    with check.soft_assertions("find book by title") as group:
        group.status_is(response, 200, "Response code is not correct")
        books = group.is_array(group.json_body(response, "Response content is not as expected"),
                               "The response content is not array")
        book = group.contains(
            books,
            lambda b: check.text_field(b, "title") == SEEDED_TITLE,
            f"Book with title {SEEDED_TITLE} does not exist",
        )
        if book is not None:
            group.equals(check.text_field(book, "author"), SEEDED_AUTHOR, "Author is not as expected")


def book_catalog() -> Scenario:
    return Scenario(
        name="book-catalog",
        description="Check the full book listing and the seeded 'The Great Gatsby' record",
        steps=(
            Step("list books have required fields", list_books_have_required_fields),
            Step("find book by title", find_seeded_book),
        ),
    )


# -----------------------------------------------------------------------------
# book-lifecycle
# -----------------------------------------------------------------------------


def resolve_category(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(CATEGORY_PATH)

    with check.soft_assertions("get categories") as group:
        group.status_is(response, 200, "Get categories status code is not as expected")
        group.not_empty(response.text, "Response content is not as expected")

    categories = check.is_array(check.json_body(response, "Response content is not JSON"),
                                "Categories response is not an array")
    first = check.not_empty(categories, "No category exists to reference from a new book")[0]
    ctx.remember_id("category", check.not_empty(check.text_field(first, "_id"),
                                                "Category id is not as expected"))


def create_book(client: BookstoreClient, ctx: ScenarioContext) -> None:
    payload = new_book(ctx.require_id("category"), ctx.rng)
    ctx.values["book"] = payload
    ctx.values["title"] = payload["title"]

    response = client.post(BOOK_PATH, json=payload, token=ctx.token)

    with check.soft_assertions("create book") as group:
        group.status_is(response, 200, "Status code is not as expected")
        group.not_empty(response.text, "Response content is not as expected")

    created = check.json_body(response, "Create response is not JSON")
    ctx.remember_id("book", check.not_empty(check.text_field(created, "_id"),
                                            "Book id is not as expected"))


def verify_book_created(client: BookstoreClient, ctx: ScenarioContext) -> None:
    book_id = ctx.require_id("book")
    sent = ctx.require_value("book")
    response = client.get(book_path(book_id))

    with check.soft_assertions("get book by id") as group:
        group.status_is(response, 200, "Status code is not as expected")
        book = group.is_object(group.json_body(response, "Response content is not as expected"),
                               "Book is not an object")
        if book is not None:
            group.equals(check.text_field(book, "title"), sent["title"], "New book title is not as expected")
            group.equals(check.text_field(book, "author"), sent["author"], "New book author is not as expected")
            group.equals(check.text_field(book, "description"), sent["description"],
                         "New book description is not as expected")
            group.equals(check.field(book, "price"), sent["price"], "New book price is not as expected")
            group.equals(check.field(book, "pages"), sent["pages"], "New book pages is not as expected")
            group.equals(nested_id(book, "category"), sent["category"], "Category id is not as expected")

    listing = client.get(BOOK_PATH)
    check.status_is(listing, 200, "Response code is not correct")
    books = check.is_array(check.json_body(listing, "Response content is not as expected"),
                           "The response content is not array")
    title = ctx.require_value("title")
    found = check.contains(books, lambda b: check.text_field(b, "title") == title,
                           f"Book with title {title} does not exist")
    check.equals(check.text_field(found, "_id"), book_id, f"Book titled {title} has another id")


def update_book(client: BookstoreClient, ctx: ScenarioContext) -> None:
    title = ctx.require_value("title") + UPDATED_TITLE_SUFFIX
    ctx.values["title"] = title
    ctx.values["author"] = UPDATED_AUTHOR

    response = client.put(
        book_path(ctx.require_id("book")),
        json={"title": title, "author": UPDATED_AUTHOR},
        token=ctx.token,
    )

    with check.soft_assertions("update book") as group:
        group.status_is(response, 200, "The response does not have the correct status code")
        updated = group.json_body(response, "Response content is not as expected")
        group.equals(check.text_field(updated, "title"), title, "Updated title is not as expected")
        group.equals(check.text_field(updated, "author"), UPDATED_AUTHOR, "Updated author is not as expected")


def verify_book_updated(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(book_path(ctx.require_id("book")))

    with check.soft_assertions("get updated book") as group:
        group.status_is(response, 200, "Status code is not as expected")
        book = group.json_body(response, "Response content is not as expected")
        group.equals(check.text_field(book, "title"), ctx.require_value("title"), "Book title was not updated")
        group.equals(check.text_field(book, "author"), ctx.require_value("author"), "Book author was not updated")
        group.equals(nested_id(book, "category"), ctx.require_id("category"),
                     "Category changed after a partial update")


def delete_book(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.delete(book_path(ctx.require_id("book")), token=ctx.token)
    check.status_is(response, 200, "Status code is not as expected")


def verify_book_deleted(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(book_path(ctx.require_id("book")))
    check.is_absent(response, "Deleted book is still returned")


def book_lifecycle() -> Scenario:
    return Scenario(
        name="book-lifecycle",
        description="Create a book in an existing category, verify, update, delete and verify absence",
        steps=(
            Step("resolve category", resolve_category),
            Step("create book", create_book, ScenarioState.HAS_ENTITY),
            Step("verify book created", verify_book_created, ScenarioState.VERIFIED),
            Step("update book", update_book, ScenarioState.UPDATED),
            Step("verify book updated", verify_book_updated, ScenarioState.CONFIRMED),
            Step("delete book", delete_book, ScenarioState.DELETED),
            Step("verify book deleted", verify_book_deleted),
        ),
    )
