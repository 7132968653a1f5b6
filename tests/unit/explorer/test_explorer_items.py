from __future__ import annotations

import pytest

from folio.content.schemas import BlogFrontmatter, ProjectFrontmatter
from folio.content.store import ContentSummary
from folio.explorer.projection import BLOG_PROJECTION, PROJECTS_PROJECTION
from folio.explorer.types import ExplorerItem, ExplorerView


def test_item_requires_id_and_href():
    with pytest.raises(ValueError, match="id"):
        ExplorerItem(id="", href="/x", title="X")
    with pytest.raises(ValueError, match="href"):
        ExplorerItem(id="x", href="", title="X")


def test_to_dict_drops_absent_fields_but_keeps_empty_ones():
    item = ExplorerItem(id="x", href="/blog/x", title="X", summary="", tags=("a", "b"), confidential=False)

    assert item.to_dict() == {
        "id": "x",
        "href": "/blog/x",
        "title": "X",
        "summary": "",
        "tags": ["a", "b"],
        "confidential": False,
    }


def test_project_projection_maps_stack_to_tags():
    fm = ProjectFrontmatter(
        title="SIEM rollout",
        date="2024-04-04",
        type="cyber",
        summary="Wazuh on a budget.",
        stack=["Wazuh", "Docker"],
    )

    item = PROJECTS_PROJECTION.project(ContentSummary(slug="siem", frontmatter=fm))

    assert item == ExplorerItem(
        id="siem",
        href="/projects/siem",
        title="SIEM rollout",
        summary="Wazuh on a budget.",
        date="2024-04-04",
        type="cyber",
        tags=("Wazuh", "Docker"),
        confidential=False,
    )


def test_blog_projection_defaults_type():
    fm = BlogFrontmatter(title="Hello", date="2024-01-01", summary="First post.")

    item = BLOG_PROJECTION.project(ContentSummary(slug="hello", frontmatter=fm))

    assert item.href == "/blog/hello"
    assert item.type == "blog"
    assert item.tags == ()


def test_view_is_empty_by_default():
    view = ExplorerView()

    assert view.count == 0
    assert view.summary == "Showing 0 items"
