"""Template rendering for generated pages."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional

from jinja2 import (
    ChoiceLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    TemplateNotFound,
)

from . import utils
from .config import DoxywikiConfig
from .logging import get_logger

TEMPLATE_SUFFIX = ".j2"

_FILTERS: Dict[str, Callable[..., Any]] = {
    "md_escape": utils.escape,
    "title": utils.title,
    "safe_anchor_id": utils.safe_anchor_id,
    "strip_namespace": utils.strip_namespace,
    "strip_anchor": utils.strip_anchor,
    "namespace_to_package": utils.namespace_to_package,
    "replace_newline": utils.replace_newline,
    "wiki_safe_file_name": utils.wiki_safe_file_name,
    "to_lower": utils.to_lower,
    "split": utils.split,
}

_GLOBALS: Dict[str, Callable[..., Any]] = {
    "date": utils.date,
}


class RenderError(RuntimeError):
    """Raised when a page cannot be rendered or written."""


class Renderer:
    """Renders jinja2 templates into files below the configured output directory."""

    def __init__(self, config: DoxywikiConfig, templates_dir: Path | None = None) -> None:
        self.config = config
        self.templates_dir = templates_dir or config.templates_dir
        self._env = self._create_env(self.templates_dir)
        self.logger = get_logger("renderer")

    def render(self, template_name: str, path: str | Path, data: Mapping[str, Any]) -> Path:
        """Render ``template_name`` with ``data`` into ``<output_dir>/<path>``."""
        destination = self.config.output_dir / path
        content = self.render_string(template_name, data)
        self.logger.info("Rendering %s", destination)
        try:
            destination.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise RenderError(f"File {destination} failed to open for writing") from exc
        return destination

    def render_string(self, template_name: str, data: Mapping[str, Any]) -> str:
        try:
            template = self._env.get_template(f"{template_name}{TEMPLATE_SUFFIX}")
        except TemplateNotFound as exc:
            raise RenderError(f"Template {template_name} not found") from exc
        try:
            return template.render(dict(data), config=self._template_globals())
        except TemplateError as exc:
            raise RenderError(f"Template {template_name} failed to render: {exc}") from exc

    def _template_globals(self) -> Dict[str, Any]:
        return {
            "base_url": self.config.base_url,
            "file_ext": self.config.file_ext,
            "link_suffix": self.config.link_suffix,
        }

    @staticmethod
    def _create_env(templates_dir: Optional[Path]) -> Environment:
        loaders: List[Any] = []
        if templates_dir:
            loaders.append(FileSystemLoader(str(templates_dir)))
        loaders.append(PackageLoader("doxywiki", "templates"))
        env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=False,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
        )
        env.filters.update(_FILTERS)
        env.globals.update(_GLOBALS)
        return env


__all__ = ["RenderError", "Renderer", "TEMPLATE_SUFFIX"]
