"""Map collection frontmatter onto the uniform :class:`ExplorerItem` shape.

Inputs are assumed to be validated already; nothing is checked here beyond
what :class:`ExplorerItem` itself enforces.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from folio.explorer.types import ExplorerItem

if TYPE_CHECKING:
    from pydantic import BaseModel

    from folio.content.store import ContentSummary


def _field(frontmatter: BaseModel, name: str) -> Any:
    value = getattr(frontmatter, name, None)
    if value is None:
        value = (frontmatter.model_extra or {}).get(name)
    return value


@dataclass(frozen=True, slots=True)
class Projection:
    """How one collection maps onto explorer items.

    Attributes:
        href_template: Link target with a ``{slug}`` placeholder.
        default_type: ``type`` used when the frontmatter has none.
        tags_field: Frontmatter field holding the item's categories.

    """

    href_template: str
    default_type: str
    tags_field: str = "tags"

    def project(self, summary: ContentSummary[Any]) -> ExplorerItem:
        fm = summary.frontmatter
        tags = _field(fm, self.tags_field) or ()
        return ExplorerItem(
            id=summary.slug,
            href=self.href_template.format(slug=summary.slug),
            title=fm.title,
            summary=_field(fm, "summary"),
            date=_field(fm, "date"),
            type=_field(fm, "type") or self.default_type,
            tags=tuple(str(tag) for tag in tags),
            confidential=bool(_field(fm, "confidential")),
        )

    def project_all(self, summaries: Iterable[ContentSummary[Any]]) -> list[ExplorerItem]:
        return [self.project(summary) for summary in summaries]


PROJECTS_PROJECTION = Projection(href_template="/projects/{slug}", default_type="software", tags_field="stack")
BLOG_PROJECTION = Projection(href_template="/blog/{slug}", default_type="blog", tags_field="tags")
