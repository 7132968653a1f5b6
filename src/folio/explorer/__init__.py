"""Client-side style explorer: projection, fuzzy search, filter and sort."""

from folio.explorer.engine import Explorer, filter_items, to_timestamp
from folio.explorer.fuzzy import FuzzySearcher, SearchKey, match_score
from folio.explorer.projection import BLOG_PROJECTION, PROJECTS_PROJECTION, Projection
from folio.explorer.types import ALL_TYPES, ExplorerItem, ExplorerState, ExplorerView, SortMode

__all__ = [
    "ALL_TYPES",
    "BLOG_PROJECTION",
    "PROJECTS_PROJECTION",
    "Explorer",
    "ExplorerItem",
    "ExplorerState",
    "ExplorerView",
    "FuzzySearcher",
    "Projection",
    "SearchKey",
    "SortMode",
    "filter_items",
    "match_score",
    "to_timestamp",
]
