"""Collection-specific catalogs on top of the generic content store."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Generic

from folio.content.schemas import BlogFrontmatter, ProjectFrontmatter, required_fields
from folio.content.store import ContentItem, ContentStore, ContentSummary, F
from folio.exceptions import UnknownCollectionError
from folio.explorer.projection import BLOG_PROJECTION, PROJECTS_PROJECTION, Projection

if TYPE_CHECKING:
    from folio.config import FolioConfig
    from folio.explorer.types import ExplorerItem

logger = logging.getLogger(__name__)


class Catalog(Generic[F]):
    """One named collection with its schema and explorer projection bound in."""

    def __init__(
        self,
        store: ContentStore,
        name: str,
        schema: type[F],
        projection: Projection,
        *,
        sort_key: str = "date",
    ) -> None:
        self.store = store
        self.name = name
        self.schema = schema
        self.projection = projection
        self.sort_key = sort_key

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, schema={self.schema.__name__})"

    @property
    def required_fields(self) -> list[str]:
        return required_fields(self.schema)

    def slugs(self) -> list[str]:
        return self.store.list_slugs(self.name)

    def get_all(self) -> list[ContentSummary[F]]:
        """Every item's slug and frontmatter, newest first."""
        return self.store.load_all(self.name, self.schema, self.sort_key)

    def get_by_slug(self, slug: str) -> ContentItem[F]:
        """One item including its body.

        Raises ``ContentItemNotFoundError`` for an unknown slug, which callers
        can turn into a not-found response.
        """
        return self.store.load_by_slug(self.name, slug, self.schema)

    def explorer_items(self) -> list[ExplorerItem]:
        return self.projection.project_all(self.get_all())


def projects_catalog(store: ContentStore) -> Catalog[ProjectFrontmatter]:
    return Catalog(store, "projects", ProjectFrontmatter, PROJECTS_PROJECTION)


def blog_catalog(store: ContentStore) -> Catalog[BlogFrontmatter]:
    return Catalog(store, "blog", BlogFrontmatter, BLOG_PROJECTION)


class ContentLibrary:
    """Facade grouping every catalog of the site."""

    def __init__(self, store: ContentStore) -> None:
        self.store = store
        self.projects = projects_catalog(store)
        self.blog = blog_catalog(store)

    @classmethod
    def from_config(cls, config: FolioConfig) -> ContentLibrary:
        paths = config.paths
        return cls(ContentStore(paths.abs_content_dirs, extension=paths.content_extension))

    @property
    def catalogs(self) -> dict[str, Catalog]:
        return {catalog.name: catalog for catalog in (self.projects, self.blog)}

    def get(self, name: str) -> Catalog:
        """Resolve a catalog by collection name."""
        try:
            return self.catalogs[name]
        except KeyError:
            raise UnknownCollectionError(name, sorted(self.catalogs)) from None
