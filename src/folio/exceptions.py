"""Centralized exceptions for the Folio application."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any


class FolioError(Exception):
    """Base exception for all Folio errors."""


# ---------------------------------------------------------------------------
# Content
# ---------------------------------------------------------------------------


class ContentError(FolioError):
    """Base exception for content loading errors."""


class CollectionDirectoryNotFoundError(ContentError):
    """Raised when none of the candidate directories for a collection exists."""

    def __init__(self, collection: str, candidates: Sequence[Path]) -> None:
        self.collection = collection
        self.candidates = list(candidates)
        tried = "\n".join(f"- {path}" for path in self.candidates)
        super().__init__(f"Content directory not found for '{collection}'. Tried:\n{tried}")


class ContentItemNotFoundError(ContentError):
    """Raised when a slug has no backing file in its collection."""

    def __init__(self, collection: str, slug: str) -> None:
        self.collection = collection
        self.slug = slug
        super().__init__(f"{collection} item not found: {slug}")


class FrontmatterParsingError(ContentError):
    """Raised when the frontmatter block of an item cannot be parsed."""

    def __init__(self, collection: str, slug: str, reason: str) -> None:
        self.collection = collection
        self.slug = slug
        self.reason = reason
        super().__init__(f"Invalid frontmatter in {collection}/{slug}: {reason}")


class FrontmatterValidationError(ContentError):
    """Raised when an item's frontmatter misses required fields or holds invalid values."""

    def __init__(
        self,
        collection: str,
        slug: str,
        *,
        required: Sequence[str] = (),
        missing: Sequence[str] = (),
        invalid: Sequence[tuple[str, str]] = (),
    ) -> None:
        self.collection = collection
        self.slug = slug
        self.required = list(required)
        self.missing = list(missing)
        self.invalid = list(invalid)

        problems = []
        if self.missing:
            problems.append(f"missing {', '.join(self.missing)}")
        problems.extend(f"{field}: {reason}" for field, reason in self.invalid)
        needs = f" (needs {', '.join(self.required)})" if self.required else ""
        super().__init__(
            f"Missing required {collection} frontmatter in {slug}{needs}: {'; '.join(problems)}"
            if self.missing
            else f"Invalid {collection} frontmatter in {slug}: {'; '.join(problems)}"
        )


class UnknownCollectionError(ContentError):
    """Raised when a collection name is not registered in the library."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown collection '{name}'. Available collections: {', '.join(self.available)}")


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class RenderError(FolioError):
    """Base exception for body rendering errors."""


class UnknownComponentError(RenderError):
    """Raised when a body references a component missing from the registry."""

    def __init__(self, name: str, available: Sequence[str]) -> None:
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown component <{name}>. Registered components: {', '.join(self.available)}")


class ComponentPropsError(RenderError):
    """Raised when a component tag carries props it cannot be rendered with."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Invalid props for <{name}>: {reason}")


# ---------------------------------------------------------------------------
# Contact relay
# ---------------------------------------------------------------------------


class ContactError(FolioError):
    """Base exception for the contact relay."""


class RelayNotConfiguredError(ContactError):
    """Raised when a setting required to relay messages is absent."""

    def __init__(self, setting: str) -> None:
        self.setting = setting
        super().__init__(f"Missing {setting}")


class RelayError(ContactError):
    """Raised when the message relay rejects or fails to deliver a message."""

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        self.reason = reason
        self.status_code = status_code
        suffix = f" (HTTP {status_code})" if status_code is not None else ""
        super().__init__(f"Message relay failed{suffix}: {reason}")


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class ConfigError(FolioError):
    """Raised when the configuration cannot be loaded or fails validation."""

    def __init__(self, source: str, errors: Sequence[dict[str, Any]] | None = None) -> None:
        self.source = source
        self.errors = list(errors or [])
        super().__init__(f"Configuration from {source} failed validation with {len(self.errors)} error(s).")
