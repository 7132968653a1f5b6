"""Tests for YAML frontmatter parsing."""

from __future__ import annotations

import pytest

from folio.markdown.frontmatter import FrontmatterSyntaxError, parse_frontmatter, parse_frontmatter_file


def test_parse_frontmatter_splits_metadata_and_body():
    metadata, body = parse_frontmatter("---\ntitle: Hello\ntags: [a, b]\n---\n# Heading\n\nText.\n")

    assert metadata == {"title": "Hello", "tags": ["a", "b"]}
    assert body.startswith("# Heading")


def test_body_keeps_leading_indent_and_trailing_text():
    metadata, body = parse_frontmatter("---\ntitle: Code\n---\n    indented code\n\nText.\n")

    assert metadata == {"title": "Code"}
    assert body == "    indented code\n\nText.\n"


def test_body_after_crlf_delimiter():
    _, body = parse_frontmatter("---\r\ntitle: Windows\r\n---\r\nLine one.\r\n")

    assert body == "Line one.\r\n"


def test_content_without_block_has_empty_metadata():
    metadata, body = parse_frontmatter("No metadata here.")

    assert metadata == {}
    assert body == "No metadata here."


def test_yaml_dates_become_iso_strings():
    metadata, _ = parse_frontmatter(
        "---\ndate: 2024-03-05\nupdated: 2024-03-06 10:30:00\nhistory:\n  - 2023-01-02\n---\n"
    )

    assert metadata["date"] == "2024-03-05"
    assert metadata["updated"] == "2024-03-06"
    assert metadata["history"] == ["2023-01-02"]


def test_quoted_dates_stay_untouched():
    metadata, _ = parse_frontmatter("---\ndate: '2024-03-05'\n---\n")

    assert metadata["date"] == "2024-03-05"


def test_malformed_yaml_raises_syntax_error():
    with pytest.raises(FrontmatterSyntaxError, match="malformed YAML"):
        parse_frontmatter("---\ntitle: [unclosed\n---\nbody")


def test_non_mapping_metadata_raises_syntax_error():
    with pytest.raises(FrontmatterSyntaxError, match="mapping"):
        parse_frontmatter("---\n- just\n- a list\n---\nbody")


def test_unclosed_block_raises_syntax_error():
    with pytest.raises(FrontmatterSyntaxError):
        parse_frontmatter("---\ntitle: Never closed\n")


def test_parse_frontmatter_file(tmp_path):
    path = tmp_path / "post.mdx"
    path.write_text("---\ntitle: Café\n---\nÉté\n", encoding="utf-8")

    metadata, body = parse_frontmatter_file(path)

    assert metadata["title"] == "Café"
    assert body.strip() == "Été"
