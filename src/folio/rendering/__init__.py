"""Body rendering: Markdown plus a fixed registry of embeddable components."""

from folio.rendering.components import Component, ComponentRegistry, default_registry
from folio.rendering.mdx import MdxRenderer, render_body

__all__ = ["Component", "ComponentRegistry", "MdxRenderer", "default_registry", "render_body"]
