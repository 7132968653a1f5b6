"""Weighted approximate text search over explorer items.

Each searchable field is scored independently against the query with an
approximate substring match: the score is the smallest number of edits
(insertions, deletions, substitutions) needed to make the query appear
anywhere in the field, divided by the query length. ``0.0`` is an exact hit
and ``1.0`` is a complete miss. Matching is case-insensitive and ignores
where in the field the match occurs.

An item matches when at least one field scores within the threshold. Matched
items are ranked by the weighted product of their matching field scores, the
way Fuse.js combines keys.
"""

from __future__ import annotations

import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Final

from folio.explorer.types import ExplorerItem

DEFAULT_THRESHOLD: Final[float] = 0.35

# A perfect field match still has to leave room for the weights to rank items.
_EPSILON: Final[float] = sys.float_info.epsilon


@dataclass(frozen=True, slots=True)
class SearchKey:
    name: str
    weight: float


DEFAULT_KEYS: Final[tuple[SearchKey, ...]] = (
    SearchKey("title", 0.55),
    SearchKey("summary", 0.30),
    SearchKey("tags", 0.10),
    SearchKey("type", 0.05),
)


@dataclass(frozen=True, slots=True)
class SearchResult:
    item: ExplorerItem
    score: float
    ref_index: int


def match_score(pattern: str, text: str) -> float:
    """Return the normalized edit distance of ``pattern`` to its best match in ``text``."""
    pattern = pattern.lower()
    text = text.lower()
    m = len(pattern)
    if m == 0:
        return 0.0
    if pattern in text:
        return 0.0

    # Sellers' algorithm: row 0 is all zeros so a match may start anywhere.
    previous = [0] * (len(text) + 1)
    for i, p_char in enumerate(pattern, start=1):
        current = [i] + [0] * len(text)
        for j, t_char in enumerate(text, start=1):
            cost = 0 if p_char == t_char else 1
            current[j] = min(previous[j - 1] + cost, previous[j] + 1, current[j - 1] + 1)
        previous = current
    return min(previous) / m


class FuzzySearcher:
    """Search a fixed list of items by weighted approximate matching."""

    def __init__(
        self,
        items: Sequence[ExplorerItem],
        *,
        keys: Sequence[SearchKey] = DEFAULT_KEYS,
        threshold: float = DEFAULT_THRESHOLD,
    ) -> None:
        total = sum(key.weight for key in keys)
        if total <= 0:
            msg = "search keys need a positive total weight"
            raise ValueError(msg)
        self.items = list(items)
        self.keys = tuple(SearchKey(key.name, key.weight / total) for key in keys)
        self.threshold = threshold

    def _field_score(self, pattern: str, item: ExplorerItem, name: str) -> float | None:
        value = getattr(item, name, None)
        if value is None:
            return None
        values = value if isinstance(value, tuple | list) else (value,)
        scores = [match_score(pattern, str(v)) for v in values if v]
        return min(scores) if scores else None

    def score(self, pattern: str, item: ExplorerItem) -> float | None:
        """Return the item's combined score, or ``None`` when no field matches."""
        total = 1.0
        matched = False
        for key in self.keys:
            field_score = self._field_score(pattern, item, key.name)
            if field_score is None or field_score > self.threshold:
                continue
            matched = True
            total *= max(field_score, _EPSILON) ** key.weight
        return total if matched else None

    def search(self, query: str) -> list[SearchResult]:
        """Return matching items, best first; ties keep input order."""
        pattern = query.strip()
        results = []
        for index, item in enumerate(self.items):
            item_score = self.score(pattern, item)
            if item_score is not None:
                results.append(SearchResult(item=item, score=item_score, ref_index=index))
        return sorted(results, key=lambda result: (result.score, result.ref_index))
