"""Generic file-backed content store.

A collection is a directory holding one file per item. The file name (minus
the content extension) is the item's slug; the file starts with a YAML
frontmatter block followed by the raw body.

Nothing is cached: every call re-reads the backing files.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Generic, TypeVar

from pydantic import BaseModel, ValidationError

from folio.config import DEFAULT_CONTENT_DIRS, DEFAULT_CONTENT_EXTENSION
from folio.content.schemas import required_fields
from folio.exceptions import (
    CollectionDirectoryNotFoundError,
    ContentItemNotFoundError,
    FrontmatterParsingError,
    FrontmatterValidationError,
)
from folio.markdown.frontmatter import FrontmatterSyntaxError, parse_frontmatter_file

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=BaseModel)

_PATH_SEPARATORS = tuple(sep for sep in (os.sep, os.altsep, "/") if sep)
_MISSING_ERROR_TYPES = frozenset({"missing", "string_too_short"})


@dataclass(frozen=True, slots=True)
class ContentSummary(Generic[F]):
    """An item without its body, as returned by listings."""

    slug: str
    frontmatter: F


@dataclass(frozen=True, slots=True)
class ContentItem(Generic[F]):
    """A fully loaded item: slug, validated frontmatter and the raw body."""

    slug: str
    frontmatter: F
    content: str

    def summary(self) -> ContentSummary[F]:
        return ContentSummary(slug=self.slug, frontmatter=self.frontmatter)


def _sort_value(frontmatter: BaseModel, key: str) -> str:
    value = getattr(frontmatter, key, None)
    if value is None:
        value = (frontmatter.model_extra or {}).get(key)
    return "" if value is None else str(value)


class ContentStore:
    """Read collections of frontmatter documents from disk."""

    def __init__(
        self,
        roots: Sequence[Path] = DEFAULT_CONTENT_DIRS,
        *,
        extension: str = DEFAULT_CONTENT_EXTENSION,
    ) -> None:
        self.roots = [Path(root) for root in roots]
        self.extension = extension

    def candidates(self, collection: str) -> list[Path]:
        """Directories that may back ``collection``, in priority order."""
        return [root / collection for root in self.roots]

    def collection_dir(self, collection: str) -> Path:
        """Resolve the directory backing ``collection``.

        A candidate holding at least one content file wins over one that merely
        exists, so an empty leftover directory does not shadow the real one.
        """
        candidates = self.candidates(collection)
        existing = [path for path in candidates if path.is_dir()]
        for path in existing:
            if any(self._is_content_file(entry) for entry in path.iterdir()):
                return path
        if existing:
            return existing[0]
        raise CollectionDirectoryNotFoundError(collection, candidates)

    def _is_content_file(self, path: Path) -> bool:
        return path.is_file() and path.name.endswith(self.extension)

    def _item_path(self, directory: Path, slug: str) -> Path | None:
        """Path of ``slug`` inside ``directory``, or ``None`` if it would escape it."""
        if slug in ("", ".", "..") or "\0" in slug or any(sep in slug for sep in _PATH_SEPARATORS):
            return None
        path = directory / f"{slug}{self.extension}"
        if not path.resolve().is_relative_to(directory.resolve()):
            return None
        return path

    def list_slugs(self, collection: str) -> list[str]:
        """Return the slugs of every item in ``collection``, sorted by name."""
        directory = self.collection_dir(collection)
        return sorted(
            entry.name[: -len(self.extension)] for entry in directory.iterdir() if self._is_content_file(entry)
        )

    def load_by_slug(self, collection: str, slug: str, schema: type[F]) -> ContentItem[F]:
        """Read one item and validate its frontmatter against ``schema``.

        Raises:
            CollectionDirectoryNotFoundError: No candidate directory exists.
            ContentItemNotFoundError: No file matches ``slug``.
            FrontmatterParsingError: The metadata block is malformed.
            FrontmatterValidationError: Required fields are missing or invalid.

        """
        directory = self.collection_dir(collection)
        path = self._item_path(directory, slug)
        if path is None or not path.is_file():
            raise ContentItemNotFoundError(collection, slug)

        try:
            metadata, body = parse_frontmatter_file(path)
        except FrontmatterSyntaxError as exc:
            raise FrontmatterParsingError(collection, slug, str(exc)) from exc

        try:
            frontmatter = schema.model_validate(metadata)
        except ValidationError as exc:
            raise _validation_error(collection, slug, schema, exc) from exc

        logger.debug("Loaded %s/%s", collection, slug)
        return ContentItem(slug=slug, frontmatter=frontmatter, content=body)

    def load_all(self, collection: str, schema: type[F], sort_key: str = "date") -> list[ContentSummary[F]]:
        """Load every item of ``collection`` without bodies, newest first.

        Items are ordered descending by the string value of ``sort_key``; for
        ISO dates this is chronological. Ties keep slug order.
        """
        items = [self.load_by_slug(collection, slug, schema).summary() for slug in self.list_slugs(collection)]
        return sorted(items, key=lambda item: _sort_value(item.frontmatter, sort_key), reverse=True)


def _validation_error(
    collection: str, slug: str, schema: type[BaseModel], exc: ValidationError
) -> FrontmatterValidationError:
    missing: list[str] = []
    invalid: list[tuple[str, str]] = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"]) or "<root>"
        if error["type"] in _MISSING_ERROR_TYPES and len(error["loc"]) == 1:
            missing.append(field)
        else:
            invalid.append((field, error["msg"]))

    return FrontmatterValidationError(
        collection,
        slug,
        required=required_fields(schema),
        missing=missing,
        invalid=invalid,
    )
