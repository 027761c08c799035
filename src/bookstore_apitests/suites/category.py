"""Book category lifecycle: create, list, update, re-read, delete, re-read."""

from .. import assertions as check
from ..client import BookstoreClient
from ..context import ScenarioContext, ScenarioState
from ..data import new_category, updated_title
from ..scenario import Scenario, Step

CATEGORY_PATH = "/category"


def category_path(category_id: str) -> str:
    return f"{CATEGORY_PATH}/{category_id}"


def create_category(client: BookstoreClient, ctx: ScenarioContext) -> None:
    payload = new_category(ctx.rng)
    ctx.values["title"] = payload["title"]

    response = client.post(CATEGORY_PATH, json=payload, token=ctx.token)
    check.status_is(response, 200, "Status code is not as expected")

    created = check.is_object(check.json_body(response, "Create response is not JSON"),
                              "Created category is not an object")
    category_id = check.not_empty(check.text_field(created, "_id"), "Category id is not as expected")
    ctx.remember_id("category", category_id)


def list_categories(client: BookstoreClient, ctx: ScenarioContext) -> None:
    category_id = ctx.require_id("category")
    response = client.get(CATEGORY_PATH)

    with check.soft_assertions("list categories") as group:
        group.status_is(response, 200, "Status code is not as expected")
        group.not_empty(response.text, "Response content is not as expected")
        categories = group.is_array(
            group.json_body(response, "Response content is not JSON"),
            "Response type is not as expected",
        )
        group.greater_than(len(categories) if categories is not None else None, 0,
                           "Categories count is less than 1")
        group.contains(
            categories,
            lambda c: check.text_field(c, "_id") == category_id,
            f"Category {category_id} is missing from the listing",
        )


def update_category(client: BookstoreClient, ctx: ScenarioContext) -> None:
    category_id = ctx.require_id("category")
    title = updated_title(ctx.require_value("title"))
    ctx.values["title"] = title

    response = client.put(category_path(category_id), json={"title": title}, token=ctx.token)
    check.status_is(response, 200, "Update status code is not as expected")


def verify_category_updated(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(category_path(ctx.require_id("category")))
    check.status_is(response, 200, "Status code is not as expected")
    category = check.json_body(response, "Response content is not as expected")
    check.equals(check.text_field(category, "title"), ctx.require_value("title"),
                 "Category title was not updated")


def delete_category(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.delete(category_path(ctx.require_id("category")), token=ctx.token)
    check.status_is(response, 200, "Delete status code is not as expected")


def verify_category_deleted(client: BookstoreClient, ctx: ScenarioContext) -> None:
    response = client.get(category_path(ctx.require_id("category")))
    check.is_absent(response, "Deleted category is still returned")


def category_lifecycle() -> Scenario:
    return Scenario(
        name="category-lifecycle",
        description="Create, list, update, verify, delete and verify absence of a category",
        steps=(
            Step("create category", create_category, ScenarioState.HAS_ENTITY),
            Step("list categories", list_categories, ScenarioState.VERIFIED),
            Step("update category", update_category, ScenarioState.UPDATED),
            Step("verify category updated", verify_category_updated, ScenarioState.CONFIRMED),
            Step("delete category", delete_category, ScenarioState.DELETED),
            Step("verify category deleted", verify_category_deleted),
        ),
    )
