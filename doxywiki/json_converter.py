"""Conversion of tree nodes into template/JSON data records."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from .config import DoxywikiConfig
from .filters import is_main_page
from .models import Node
from .naming import WikiNameResolver
from .utils import safe_anchor_id


class DataConverter(Protocol):
    """Capability the generator needs to turn nodes into data records."""

    def convert(self, node: Node) -> Dict[str, Any]:
        """Return the short record used for index entries and child lists."""

    def get_as_json(self, node: Node) -> Dict[str, Any]:
        """Return the full record rendered into a node's own page."""


class JsonConverter:
    """Builds plain ``dict`` records from nodes.

    When a :class:`WikiNameResolver` is supplied, ``url`` points at the
    resolved wiki page instead of the refid-based page, so links in rendered
    output agree with the file names the generator writes.
    """

    def __init__(
        self, config: DoxywikiConfig, resolver: Optional[WikiNameResolver] = None
    ) -> None:
        self.config = config
        self.resolver = resolver

    def convert(self, node: Node) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "refid": node.refid,
            "kind": node.kind.value,
            "category": node.category.value if node.category else None,
            "name": node.name,
            "title": node.title or node.name,
            "url": self.url_for(node),
            "anchor": safe_anchor_id(node.name),
        }
        if node.qualified_name:
            data["qualifiedName"] = node.qualified_name
        brief = node.properties.get("brief")
        if brief:
            data["brief"] = brief
        return data

    def get_as_json(self, node: Node) -> Dict[str, Any]:
        data = self.convert(node)
        for key, value in node.properties.items():
            data.setdefault(key, value)
        data["children"] = [self.convert(child) for child in node.children]
        return data

    def url_for(self, node: Node) -> str:
        if self.resolver is None or node.category is None:
            return node.url
        name = self.resolver.resolve(node)
        if is_main_page(node, self.config.main_page_name):
            return f"{self.config.base_url}{name}{self.config.link_suffix}"
        folder = f"{self.config.folder_name(node.category)}/" if self.config.use_folders else ""
        return f"{self.config.base_url}{folder}{name}{self.config.link_suffix}"


__all__ = ["DataConverter", "JsonConverter"]
