"""Registered scenario families.

Order matters when running everything: book-lifecycle references an
existing category, so category scenarios run first.
"""

from ..scenario import Scenario
from .book import book_catalog, book_lifecycle
from .category import category_lifecycle

SCENARIOS: dict[str, Scenario] = {
    scenario.name: scenario
    for scenario in (category_lifecycle(), book_catalog(), book_lifecycle())
}


def get_scenario(name: str) -> Scenario:
    """Look up a registered scenario.

    Raises:
        KeyError: If no scenario has that name
    """
    try:
        return SCENARIOS[name]
    except KeyError:
        raise KeyError(
            f"Unknown scenario '{name}'. Available: {', '.join(SCENARIOS)}"
        ) from None


__all__ = [
    "SCENARIOS",
    "book_catalog",
    "book_lifecycle",
    "category_lifecycle",
    "get_scenario",
]
