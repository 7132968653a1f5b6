"""Interactive search, filter and sort over a list of explorer items.

The visible result set is a pure function of the full item list and the
current state. Every user action recomputes it synchronously, applying the
stages in a fixed order: search, then type filter, then date sort.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, datetime
from typing import Final

from folio.explorer.fuzzy import DEFAULT_THRESHOLD, FuzzySearcher
from folio.explorer.types import ALL_TYPES, ExplorerItem, ExplorerState, ExplorerView, SortMode

logger = logging.getLogger(__name__)

EARLIEST: Final[float] = float("-inf")


def to_timestamp(value: str | None) -> float:
    """Convert an item date to a comparable instant.

    Missing or unparseable dates count as the earliest possible time.
    """
    if not value:
        return EARLIEST
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        logger.warning("Unparseable explorer date %r, sorting it as earliest", value)
        return EARLIEST
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.timestamp()


def filter_items(
    items: Sequence[ExplorerItem],
    *,
    query: str = "",
    selected_type: str = ALL_TYPES,
    sort_mode: SortMode = SortMode.NEWEST,
    searcher: FuzzySearcher | None = None,
) -> list[ExplorerItem]:
    """Apply the search, filter and sort stages to ``items``."""
    pattern = query.strip()
    if pattern:
        searcher = searcher or FuzzySearcher(items)
        base = [result.item for result in searcher.search(pattern)]
    else:
        base = list(items)

    if selected_type != ALL_TYPES:
        base = [item for item in base if item.type == selected_type]

    # sorted() is stable, including with reverse=True.
    return sorted(base, key=lambda item: to_timestamp(item.date), reverse=sort_mode == SortMode.NEWEST)


class Explorer:
    """Stateful explorer over a fixed list of items.

    State lives only as long as the instance; two explorers never share it.
    The filter panel is a two-state toggle independent from the data state.
    """

    def __init__(
        self,
        items: Sequence[ExplorerItem],
        *,
        default_sort: SortMode | str = SortMode.NEWEST,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        self.items: tuple[ExplorerItem, ...] = tuple(items)
        self.default_sort = SortMode(default_sort)
        self._searcher = FuzzySearcher(self.items, threshold=threshold)

        self.query = ""
        self.selected_type = ALL_TYPES
        self.sort_mode = self.default_sort
        self.panel_open = False
        self._results: tuple[ExplorerItem, ...] = ()
        self._recompute()

    # --- derived data ---------------------------------------------------

    @property
    def state(self) -> ExplorerState:
        return ExplorerState(
            query=self.query,
            selected_type=self.selected_type,
            sort_mode=self.sort_mode,
            panel_open=self.panel_open,
        )

    @property
    def results(self) -> tuple[ExplorerItem, ...]:
        return self._results

    @property
    def count(self) -> int:
        return len(self._results)

    @property
    def type_options(self) -> list[str]:
        """``"all"`` followed by every distinct item type, sorted."""
        types = sorted({item.type for item in self.items if item.type})
        return [ALL_TYPES, *types]

    @property
    def has_active_filters(self) -> bool:
        return bool(self.query.strip()) or self.selected_type != ALL_TYPES or self.sort_mode != self.default_sort

    def view(self) -> ExplorerView:
        return ExplorerView(items=self._results)

    def _recompute(self) -> None:
        self._results = tuple(
            filter_items(
                self.items,
                query=self.query,
                selected_type=self.selected_type,
                sort_mode=self.sort_mode,
                searcher=self._searcher,
            )
        )

    # --- data actions ---------------------------------------------------

    def set_query(self, query: str) -> None:
        self.query = query
        self._recompute()

    def select_type(self, selected_type: str) -> None:
        self.selected_type = selected_type
        self._recompute()

    def set_sort(self, sort_mode: SortMode | str) -> None:
        self.sort_mode = SortMode(sort_mode)
        self._recompute()

    def clear(self) -> None:
        """Reset query, type and sort to their defaults; the panel stays as it is."""
        self.query = ""
        self.selected_type = ALL_TYPES
        self.sort_mode = self.default_sort
        self._recompute()

    # --- panel actions --------------------------------------------------

    def toggle_panel(self) -> None:
        self.panel_open = not self.panel_open

    def close_panel(self) -> None:
        self.panel_open = False

    def apply(self) -> None:
        """The panel's apply button: results are already current, so it only closes."""
        self.close_panel()

    def pointer_down(self, *, inside_panel: bool) -> None:
        """A pointer press anywhere on the page; presses outside close the panel."""
        if self.panel_open and not inside_panel:
            self.panel_open = False
