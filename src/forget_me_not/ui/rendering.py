"""
Jinja2 rendering of the exclusion administration pages.
"""

from __future__ import annotations

from jinja2 import Environment, PackageLoader, select_autoescape
from pydantic import BaseModel, Field


class OverviewView(BaseModel):
    """View model for the excluded module overview."""

    excluded: list[str] = Field(default_factory=list)
    message: str | None = None
    select_url: str
    remove_url: str
    script_url: str | None = None


class SelectionView(BaseModel):
    """View model for the module selection form."""

    candidates: list[str] = Field(default_factory=list)
    selected: list[str] = Field(default_factory=list)
    error: str | None = None
    action_url: str
    overview_url: str


class PageRenderer:
    """Renders the administration templates with autoescaping enabled."""

    def __init__(self, env: Environment | None = None) -> None:
        self._env = env or Environment(
            loader=PackageLoader("forget_me_not", "ui/templates"),
            autoescape=select_autoescape(["html", "xml"]),
        )

    def render_overview(self, view: OverviewView) -> str:
        return self._env.get_template("overview.html").render(view=view)

    def render_selection(self, view: SelectionView) -> str:
        return self._env.get_template("select_modules.html").render(view=view)


_renderer: PageRenderer | None = None


def get_page_renderer() -> PageRenderer:
    """Shared renderer; the Jinja2 environment caches compiled templates."""
    global _renderer
    if _renderer is None:
        _renderer = PageRenderer()
    return _renderer
