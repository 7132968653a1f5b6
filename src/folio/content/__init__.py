"""Content loading: file-backed store, collection schemas and catalogs."""

from folio.content.catalog import Catalog, ContentLibrary, blog_catalog, projects_catalog
from folio.content.schemas import BlogFrontmatter, ProjectFrontmatter
from folio.content.store import ContentItem, ContentStore, ContentSummary

__all__ = [
    "BlogFrontmatter",
    "Catalog",
    "ContentItem",
    "ContentLibrary",
    "ContentStore",
    "ContentSummary",
    "ProjectFrontmatter",
    "blog_catalog",
    "projects_catalog",
]
