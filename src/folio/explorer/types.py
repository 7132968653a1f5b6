"""Core types for the content explorer."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

ALL_TYPES = "all"


class SortMode(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"


@dataclass(frozen=True, slots=True)
class ExplorerItem:
    """A collection-agnostic browsable item.

    ``id`` and ``href`` must be non-empty; every other optional field may be
    ``None`` (absent), which is distinct from an empty value.
    """

    id: str
    href: str
    title: str
    summary: str | None = None
    date: str | None = None
    type: str | None = None
    tags: tuple[str, ...] | None = None
    confidential: bool | None = None

    def __post_init__(self) -> None:
        if not self.id:
            msg = "ExplorerItem.id must be non-empty"
            raise ValueError(msg)
        if not self.href:
            msg = f"ExplorerItem.href must be non-empty (id={self.id!r})"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the client, dropping absent fields."""
        data = asdict(self)
        if self.tags is not None:
            data["tags"] = list(self.tags)
        return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True, slots=True)
class ExplorerState:
    """Snapshot of the explorer's user-controlled state."""

    query: str = ""
    selected_type: str = ALL_TYPES
    sort_mode: SortMode = SortMode.NEWEST
    panel_open: bool = False


@dataclass(frozen=True, slots=True)
class ExplorerView:
    """What the card renderer receives: the visible items and their count."""

    items: tuple[ExplorerItem, ...] = field(default_factory=tuple)

    @property
    def count(self) -> int:
        return len(self.items)

    @property
    def summary(self) -> str:
        return f"Showing {self.count} item{'' if self.count == 1 else 's'}"
