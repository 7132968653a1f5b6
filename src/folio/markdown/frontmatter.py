"""Helpers for parsing YAML frontmatter from content files."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

import yaml
from frontmatter.default_handlers import YAMLHandler

if TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)

_YAML = YAMLHandler()


class FrontmatterSyntaxError(ValueError):
    """Raised when a frontmatter block is not valid YAML or not a mapping."""


def _normalize_value(value: Any) -> Any:
    """Turn YAML date scalars back into ``YYYY-MM-DD`` strings."""
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list):
        return [_normalize_value(v) for v in value]
    if isinstance(value, dict):
        return {k: _normalize_value(v) for k, v in value.items()}
    return value


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Parse YAML frontmatter using python-frontmatter's YAML handler.

    Args:
        content: Text that may begin with a ``---`` delimited metadata block.

    Returns:
        Tuple of (metadata dict, body string). Content without a metadata block
        yields an empty dict and the full text as body.

    Raises:
        FrontmatterSyntaxError: If the block is malformed YAML or not a mapping.

    """
    if not _YAML.detect(content):
        return {}, content

    try:
        raw_block, body = _YAML.split(content)
        raw_metadata = _YAML.load(raw_block)
    except (yaml.YAMLError, ValueError) as exc:
        raise FrontmatterSyntaxError(f"malformed YAML: {exc}") from exc

    if raw_metadata is None:
        raw_metadata = {}
    if not isinstance(raw_metadata, dict):
        msg = f"metadata must be a mapping, got {type(raw_metadata).__name__}"
        raise FrontmatterSyntaxError(msg)

    metadata = {str(key): _normalize_value(value) for key, value in raw_metadata.items()}
    # Only the newline ending the closing delimiter is dropped from the body.
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return metadata, body


def parse_frontmatter_file(path: Path, *, encoding: str = "utf-8") -> tuple[dict[str, Any], str]:
    """Read a file and parse its frontmatter.

    Raises:
        OSError: If the file cannot be read.
        FrontmatterSyntaxError: If the metadata block cannot be parsed.

    """
    return parse_frontmatter(path.read_text(encoding=encoding))
