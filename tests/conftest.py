from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from folio.content.store import ContentStore
from tests.helpers.content import post_fm, project_fm, render_item

WriteItem = Callable[..., Path]


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer FOLIO_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("FOLIO_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def content_root(tmp_path: Path) -> Path:
    root = tmp_path / "content"
    root.mkdir()
    return root


@pytest.fixture
def write_item(content_root: Path) -> WriteItem:
    """Write ``<content_root>/<collection>/<slug>.mdx`` and return its path."""

    def _write(
        collection: str,
        slug: str,
        frontmatter: dict[str, Any] | str,
        body: str = "Body text.\n",
        *,
        extension: str = ".mdx",
    ) -> Path:
        directory = content_root / collection
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{slug}{extension}"
        path.write_text(render_item(frontmatter, body), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store(content_root: Path) -> ContentStore:
    return ContentStore([content_root])


@pytest.fixture
def sample_site(write_item: WriteItem, content_root: Path) -> Path:
    """A small site with three projects and two blog posts; returns the site root."""
    write_item(
        "projects",
        "soc-automation",
        project_fm(
            title="Automation pipeline",
            date="2024-06-01",
            type="automation",
            summary="Ticket triage with Python workers.",
            stack=["Python", "n8n"],
        ),
    )
    write_item("projects", "incident-playbook", project_fm(stack=["Splunk"], confidential=True))
    write_item(
        "projects",
        "vision-classifier",
        project_fm(
            title="Plant disease classifier",
            date="2023-12-01",
            type="ai",
            summary="MobileNetV2 fine-tuned on leaf photos.",
        ),
    )
    write_item("blog", "homelab", post_fm(tags=["networking"]))
    write_item(
        "blog",
        "thesis-review",
        post_fm(title="Reading list", date="2023-05-05", type="Literature Review", summary="Papers I liked."),
    )
    return content_root.parent
