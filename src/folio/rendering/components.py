"""Registry of the named components a content body may embed."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from importlib.resources import files
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict, ValidationError

from folio.exceptions import ComponentPropsError, UnknownComponentError

logger = logging.getLogger(__name__)


# --- props ------------------------------------------------------------------


class _Props(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)


class FigureProps(_Props):
    src: str
    alt: str
    caption: str | None = None
    width: int = 1400
    height: int = 800


class CalloutProps(_Props):
    title: str | None = None


class KpiItem(_Props):
    label: str
    value: str | int | float


class KpiProps(_Props):
    items: list[KpiItem]


class PhaseGridItem(_Props):
    title: str
    description: str | None = None
    tone: str | None = None


class PhaseGridProps(_Props):
    title: str | None = None
    items: list[PhaseGridItem]


# --- registry ---------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Component:
    """A named component: its props schema and a function rendering it to HTML.

    ``render`` receives the validated props and the already-rendered HTML of
    the component's children (``None`` for self-closing tags).
    """

    name: str
    props: type[BaseModel]
    render: Callable[[BaseModel, str | None], str]

    def validate_props(self, raw_props: Mapping[str, Any]) -> BaseModel:
        try:
            return self.props.model_validate(dict(raw_props))
        except ValidationError as exc:
            reasons = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or '<props>'}: {err['msg']}" for err in exc.errors()
            )
            raise ComponentPropsError(self.name, reasons) from exc

    def __call__(self, raw_props: Mapping[str, Any], children: str | None = None) -> str:
        return self.render(self.validate_props(raw_props), children)


class ComponentRegistry(Mapping[str, Component]):
    """Explicit mapping from component name to component."""

    def __init__(self, components: Mapping[str, Component] | None = None) -> None:
        self._components: dict[str, Component] = dict(components or {})

    def __getitem__(self, name: str) -> Component:
        return self._components[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._components)

    def __len__(self) -> int:
        return len(self._components)

    def register(self, component: Component) -> None:
        self._components[component.name] = component

    def resolve(self, name: str) -> Component:
        try:
            return self._components[name]
        except KeyError:
            raise UnknownComponentError(name, sorted(self._components)) from None


# --- defaults ---------------------------------------------------------------


def tone_class(tone: str | None) -> str:
    """CSS classes colour-coding a phase grid box."""
    return f"tone tone-{tone}" if tone else "tone"


def template_environment(template_dir: Path | None = None) -> Environment:
    if template_dir is None:
        template_dir = Path(str(files("folio.rendering").joinpath("templates")))
    env = Environment(
        loader=FileSystemLoader(template_dir),
        autoescape=select_autoescape(["html", "jinja"], default_for_string=True),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["tone_class"] = tone_class
    return env


def _template_renderer(env: Environment, template_name: str) -> Callable[[BaseModel, str | None], str]:
    template = env.get_template(template_name)

    def render(props: BaseModel, children: str | None) -> str:
        return template.render(props=props, children=children or "")

    return render


def default_registry(env: Environment | None = None) -> ComponentRegistry:
    """The components available to every content body."""
    env = env or template_environment()
    return ComponentRegistry(
        {
            "Figure": Component("Figure", FigureProps, _template_renderer(env, "figure.html.jinja")),
            "Callout": Component("Callout", CalloutProps, _template_renderer(env, "callout.html.jinja")),
            "Kpi": Component("Kpi", KpiProps, _template_renderer(env, "kpi.html.jinja")),
            "PhaseGrid": Component("PhaseGrid", PhaseGridProps, _template_renderer(env, "phase_grid.html.jinja")),
        }
    )
