"""
FilterState - the user-controlled view over the post collection.
"""

from enum import Enum
from typing import Mapping, Optional
from pydantic import ConfigDict, Field

from .base import BaseRecord
from .post import Category


class RecencyWindow(str, Enum):
    """How far back a post may have been published and still be shown."""
    ALL = "all"
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"

    @property
    def bound_ms(self) -> Optional[int]:
        """Maximum age in milliseconds, None for no bound."""
        return _WINDOW_BOUNDS_MS[self]


_WINDOW_BOUNDS_MS = {
    RecencyWindow.ALL: None,
    RecencyWindow.HOUR: 3_600_000,
    RecencyWindow.DAY: 86_400_000,
    RecencyWindow.WEEK: 604_800_000,
}


def _all_visible() -> dict[Category, bool]:
    return {category: True for category in Category}


class FilterState(BaseRecord):
    """
    Snapshot of the filter controls.

    The UI owns the live values; the engine only ever reads a snapshot.
    """
    # Search text is matched as typed, leading/trailing spaces included
    model_config = ConfigDict(str_strip_whitespace=False)

    search_term: str = ""
    category_visibility: dict[Category, bool] = Field(default_factory=_all_visible)
    recency_window: RecencyWindow = RecencyWindow.ALL

    def is_visible(self, category: Category) -> bool:
        """Categories missing from the mapping are hidden."""
        return self.category_visibility.get(category, False)

    def with_category(self, category: Category, visible: bool) -> "FilterState":
        """Copy with one category toggled."""
        visibility = dict(self.category_visibility)
        visibility[category] = visible
        return self.model_copy(update={"category_visibility": visibility})

    def merged(self, data: dict) -> "FilterState":
        """
        Copy with the given fields replaced.

        Partial category maps are merged over the current one, so a client
        can flip a single category without restating the rest.

        Raises ValueError for a visibility map that is not a mapping of
        category name to true/false.
        """
        current = self.model_dump()
        visibility = dict(self.category_visibility)
        changes = data.get("category_visibility")
        if changes is None:
            changes = {}
        if not isinstance(changes, Mapping):
            raise ValueError("category_visibility must be an object of category -> true/false")
        for key, visible in changes.items():
            if not isinstance(visible, bool):
                raise ValueError(f"visibility for {key!r} must be true or false")
            visibility[Category(key)] = visible
        current.update({k: v for k, v in data.items() if k != "category_visibility"})
        current["category_visibility"] = visibility
        return FilterState.model_validate(current)
