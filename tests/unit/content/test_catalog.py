from __future__ import annotations

import pytest

from folio.config import FolioConfig
from folio.content import ContentLibrary
from folio.content.labels import DEFAULT_TYPE_LABEL, type_label
from folio.exceptions import ContentItemNotFoundError, UnknownCollectionError


@pytest.fixture
def library(sample_site, store) -> ContentLibrary:
    return ContentLibrary(store)


def test_catalogs_are_keyed_by_collection_name(library):
    assert list(library.catalogs) == ["projects", "blog"]
    assert library.get("projects") is library.catalogs["projects"]


def test_unknown_collection(library):
    with pytest.raises(UnknownCollectionError) as excinfo:
        library.get("photos")

    assert excinfo.value.name == "photos"
    assert excinfo.value.available == ["blog", "projects"]


def test_required_fields_per_collection(library):
    assert library.projects.required_fields == ["title", "date", "summary", "type"]
    assert library.blog.required_fields == ["title", "date", "summary"]


def test_projects_get_all_newest_first(library):
    items = library.projects.get_all()

    assert [item.slug for item in items] == ["soc-automation", "incident-playbook", "vision-classifier"]


def test_get_by_slug_and_not_found(library):
    item = library.blog.get_by_slug("homelab")
    assert item.frontmatter.tags == ["networking"]

    with pytest.raises(ContentItemNotFoundError):
        library.blog.get_by_slug("nope")


def test_project_explorer_items(library):
    items = {item.id: item for item in library.projects.explorer_items()}

    automation = items["soc-automation"]
    assert automation.href == "/projects/soc-automation"
    assert automation.type == "automation"
    assert automation.tags == ("Python", "n8n")
    assert automation.confidential is False

    playbook = items["incident-playbook"]
    assert playbook.confidential is True
    assert playbook.tags == ("Splunk",)

    assert items["vision-classifier"].tags == ()


def test_blog_explorer_items_default_type(library):
    items = {item.id: item for item in library.blog.explorer_items()}

    assert items["homelab"].href == "/blog/homelab"
    assert items["homelab"].type == "blog"
    assert items["homelab"].tags == ("networking",)
    assert items["thesis-review"].type == "Literature Review"


def test_library_from_config_uses_site_root(sample_site):
    config = FolioConfig.load(sample_site)

    library = ContentLibrary.from_config(config)

    assert library.projects.slugs() == ["incident-playbook", "soc-automation", "vision-classifier"]


@pytest.mark.parametrize(
    ("key", "label"),
    [
        ("cyber", "Cybersecurity"),
        ("ai", "AI"),
        ("automation", "Automation"),
        ("Case Study", "Case Study"),
        ("something-new", DEFAULT_TYPE_LABEL),
    ],
)
def test_type_label(key, label):
    assert type_label(key) == label
