"""Test data generation.

Titles get a random numeric suffix from the half-open range [999, 9999) so
repeated runs against the same environment rarely collide.
"""

import random
from typing import Any

TITLE_SUFFIX_LOW = 999
TITLE_SUFFIX_HIGH = 9999

CATEGORY_TITLE_PREFIX = "categoryName"
BOOK_TITLE_PREFIX = "bookTitle"

DEFAULT_BOOK = {
    "author": "Test author",
    "description": "Test description",
    "price": 20.99,
    "pages": 50,
}


def generate_title(
    prefix: str,
    rng: random.Random | None = None,
    low: int = TITLE_SUFFIX_LOW,
    high: int = TITLE_SUFFIX_HIGH,
) -> str:
    """Build ``<prefix>_<n>`` with ``low <= n < high``.

    Args:
        prefix: Fixed title prefix
        rng: Random source (module-level random when omitted)
        low: Inclusive lower bound of the suffix
        high: Exclusive upper bound of the suffix

    Returns:
        Generated title
    """
    if low >= high:
        raise ValueError(f"Empty suffix range [{low}, {high})")
    source = rng or random
    return f"{prefix}_{source.randrange(low, high)}"


def updated_title(title: str, suffix: str = "_updated") -> str:
    return f"{title}{suffix}"


def new_category(rng: random.Random | None = None) -> dict[str, Any]:
    return {"title": generate_title(CATEGORY_TITLE_PREFIX, rng)}


def new_book(category_id: str, rng: random.Random | None = None) -> dict[str, Any]:
    """Create-book payload referencing an existing category."""
    return {
        "title": generate_title(BOOK_TITLE_PREFIX, rng),
        **DEFAULT_BOOK,
        "category": category_id,
    }
