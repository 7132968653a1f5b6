"""Display labels for the short ``type`` keys stored in frontmatter."""

from __future__ import annotations

from typing import Final

DEFAULT_TYPE_LABEL: Final[str] = "Software"

TYPE_LABELS: Final[dict[str, str]] = {
    "cyber": "Cybersecurity",
    "ai": "AI",
    "AI": "AI",
    "automation": "Automation",
    "blog": "Blog",
    "photo": "Photography",
    "Case Study": "Case Study",
    "Literature Review": "Literature Review",
}


def type_label(type_key: str) -> str:
    """Convert a frontmatter ``type`` key into a human-readable label."""
    return TYPE_LABELS.get(type_key, DEFAULT_TYPE_LABEL)
