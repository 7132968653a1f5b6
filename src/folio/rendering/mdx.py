"""Render a content body that mixes Markdown with registered components.

Components are written as JSX-like tags::

    <Figure src="/img/flow.png" alt="Pipeline" width={1200} />
    <Callout title="Note">Markdown **children**</Callout>

Quoted attribute values are plain strings. Braced values are parsed as YAML
flow values, which covers the numbers, booleans and object/array literals
used in content. Tags inside fenced code blocks are left alone.
"""

from __future__ import annotations

import logging
import re
import textwrap
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

import yaml
from markdown_it import MarkdownIt

from folio.exceptions import ComponentPropsError
from folio.rendering.components import ComponentRegistry, default_registry

logger = logging.getLogger(__name__)

_TAG_START = re.compile(r"<([A-Z][A-Za-z0-9]*)(?=[\s/>])")
_ATTR_NAME = re.compile(r"[A-Za-z_][\w-]*")
_FENCE_MARKERS = ("```", "~~~")
# A backtick run closed by a run of the same length, not crossing a blank line.
_CODE_SPAN = re.compile(r"(?<!`)(`+)(?!`)((?:(?!\n[ \t]*\n).)+?)(?<!`)\1(?!`)", re.DOTALL)


@dataclass(frozen=True, slots=True)
class ComponentTag:
    """One top-level component occurrence within a text segment."""

    name: str
    props: dict[str, Any]
    children: str | None
    start: int
    end: int


def _matching_brace(text: str, start: int) -> int:
    depth = 0
    quote: str | None = None
    i = start
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    return -1


def _parse_expression(name: str, key: str, expression: str) -> Any:
    try:
        return yaml.safe_load(expression.strip())
    except yaml.YAMLError as exc:
        raise ComponentPropsError(name, f"cannot parse {key}={{{expression.strip()}}}: {exc}") from exc


def _parse_attributes(text: str, i: int, name: str) -> tuple[dict[str, Any], int, bool]:
    """Parse attributes from ``i`` up to the end of the opening tag.

    Returns the props, the index after the tag and whether it was self-closing.
    """
    props: dict[str, Any] = {}
    n = len(text)
    while True:
        while i < n and text[i].isspace():
            i += 1
        if i >= n:
            raise ComponentPropsError(name, "unterminated tag")
        if text.startswith("/>", i):
            return props, i + 2, True
        if text[i] == ">":
            return props, i + 1, False

        match = _ATTR_NAME.match(text, i)
        if not match:
            raise ComponentPropsError(name, f"unexpected {text[i]!r} in tag")
        key = match.group(0)
        i = match.end()
        if i >= n or text[i] != "=":
            props[key] = True
            continue

        i += 1
        opener = text[i] if i < n else ""
        if opener in ("'", '"'):
            close = text.find(opener, i + 1)
            if close == -1:
                raise ComponentPropsError(name, f"unterminated value for {key}")
            props[key] = text[i + 1 : close]
        elif opener == "{":
            close = _matching_brace(text, i)
            if close == -1:
                raise ComponentPropsError(name, f"unterminated expression for {key}")
            props[key] = _parse_expression(name, key, text[i + 1 : close])
        else:
            raise ComponentPropsError(name, f"value of {key} must be quoted or braced")
        i = close + 1


def _find_closing(text: str, cursor: int, name: str) -> tuple[int, int]:
    close_re = re.compile(rf"</{name}\s*>")
    open_re = re.compile(rf"<{name}(?=[\s/>])")
    depth = 1
    pos = cursor
    while True:
        close = close_re.search(text, pos)
        if not close:
            raise ComponentPropsError(name, f"missing closing </{name}>")
        opening = open_re.search(text, pos, close.start())
        if opening:
            _, pos, self_closing = _parse_attributes(text, opening.end(), name)
            if not self_closing:
                depth += 1
            continue
        depth -= 1
        if depth == 0:
            return close.start(), close.end()
        pos = close.end()


def code_spans(text: str) -> list[tuple[int, int]]:
    """Return the ``(start, end)`` offsets of the inline code spans in ``text``."""
    return [match.span() for match in _CODE_SPAN.finditer(text)]


def find_component_tags(text: str) -> list[ComponentTag]:
    """Return the top-level component tags of a fence-free text segment.

    Tags inside inline code spans are plain text and are skipped.
    """
    spans = code_spans(text)
    tags: list[ComponentTag] = []
    pos = 0
    while match := _TAG_START.search(text, pos):
        span_end = next((end for start, end in spans if start <= match.start() < end), None)
        if span_end is not None:
            pos = span_end
            continue
        name = match.group(1)
        props, cursor, self_closing = _parse_attributes(text, match.end(), name)
        if self_closing:
            children, end = None, cursor
        else:
            close_start, end = _find_closing(text, cursor, name)
            children = text[cursor:close_start]
        tags.append(ComponentTag(name=name, props=props, children=children, start=match.start(), end=end))
        pos = end
    return tags


def split_fences(body: str) -> list[tuple[bool, str]]:
    """Split ``body`` into ``(is_code, text)`` segments around fenced code blocks."""
    segments: list[tuple[bool, str]] = []
    buffer: list[str] = []
    in_fence = False
    for line in body.splitlines(keepends=True):
        if line.lstrip().startswith(_FENCE_MARKERS):
            if in_fence:
                buffer.append(line)
                segments.append((True, "".join(buffer)))
                buffer = []
            else:
                if buffer:
                    segments.append((False, "".join(buffer)))
                buffer = [line]
            in_fence = not in_fence
            continue
        buffer.append(line)
    if buffer:
        segments.append((in_fence, "".join(buffer)))
    return segments


def _collapse(html: str) -> str:
    # A blank line would end the Markdown HTML block early.
    return "\n".join(line for line in html.splitlines() if line.strip())


class MdxRenderer:
    """Turn a raw body plus a component registry into HTML."""

    def __init__(self, registry: ComponentRegistry | None = None) -> None:
        self.registry = registry if registry is not None else default_registry()
        self._md = MarkdownIt("commonmark", {"html": True})

    def _walk(self, body: str) -> Iterator[ComponentTag]:
        for is_code, segment in split_fences(body):
            if is_code:
                continue
            for tag in find_component_tags(segment):
                yield tag
                if tag.children:
                    yield from self._walk(textwrap.dedent(tag.children))

    def references(self, body: str) -> list[str]:
        """Every component name used in ``body``, nested ones included, in order."""
        return [tag.name for tag in self._walk(body)]

    def validate(self, body: str) -> None:
        """Check every component in ``body`` without rendering it.

        Raises ``UnknownComponentError`` for an unregistered name and
        ``ComponentPropsError`` for props its schema rejects.
        """
        for tag in self._walk(body):
            self.registry.resolve(tag.name).validate_props(tag.props)

    def render(self, body: str) -> str:
        self.validate(body)
        return self._md.render(self._expand(body))

    def _expand(self, body: str) -> str:
        parts: list[str] = []
        for is_code, segment in split_fences(body):
            if is_code:
                parts.append(segment)
                continue
            cursor = 0
            for tag in find_component_tags(segment):
                parts.append(segment[cursor : tag.start])
                parts.append(f"\n\n{_collapse(self._render_tag(tag))}\n\n")
                cursor = tag.end
            parts.append(segment[cursor:])
        return "".join(parts)

    def _render_tag(self, tag: ComponentTag) -> str:
        component = self.registry.resolve(tag.name)
        children = None
        if tag.children is not None:
            children = self._md.render(self._expand(textwrap.dedent(tag.children).strip())).strip()
        logger.debug("Rendering component <%s>", tag.name)
        return component(tag.props, children)


def render_body(body: str, registry: ComponentRegistry | None = None) -> str:
    """Render ``body`` with the default (or given) component registry."""
    return MdxRenderer(registry).render(body)
