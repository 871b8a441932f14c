"""Loads the analyzer's documentation tree from its JSON export."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List

from .logging import get_logger
from .models import DocTree, FolderCategory, Kind, Node

_KNOWN_KEYS = {"refid", "kind", "name", "title", "qualifiedName", "url", "category", "children"}

logger = get_logger("loader")


class TreeLoadError(RuntimeError):
    """Raised when the exported documentation tree is malformed."""


def load_tree(path: Path) -> DocTree:
    """Read ``path`` and build a :class:`DocTree` from it."""
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise TreeLoadError(f"File {path} failed to open for reading") from exc
    except json.JSONDecodeError as exc:
        raise TreeLoadError(f"File {path} is not valid JSON: {exc}") from exc
    tree = tree_from_payload(payload)
    logger.info("Loaded %d nodes from %s", len(tree), path)
    return tree


def tree_from_payload(payload: Any) -> DocTree:
    """Build a tree from either a list of top-level nodes or a root object."""
    if isinstance(payload, list):
        raw_children = payload
    elif isinstance(payload, dict):
        raw_children = payload.get("children", [])
    else:
        raise TreeLoadError("Documentation tree must be a JSON list or object")
    if not isinstance(raw_children, list):
        raise TreeLoadError("'children' must be a list")

    children = [_node_from_dict(item, "children") for item in raw_children]
    try:
        return DocTree.from_children(children)
    except ValueError as exc:
        raise TreeLoadError(str(exc)) from exc


def _node_from_dict(data: Any, where: str) -> Node:
    if not isinstance(data, dict):
        raise TreeLoadError(f"Expected an object at {where}")
    refid = data.get("refid")
    if not isinstance(refid, str) or not refid:
        raise TreeLoadError(f"Node at {where} is missing a refid")
    try:
        kind = Kind.parse(str(data.get("kind", "")))
    except ValueError as exc:
        raise TreeLoadError(f"{exc} for node '{refid}'") from exc

    category = None
    if data.get("category"):
        try:
            category = FolderCategory.parse(str(data["category"]))
        except ValueError as exc:
            raise TreeLoadError(f"{exc} for node '{refid}'") from exc

    raw_children = data.get("children") or []
    if not isinstance(raw_children, list):
        raise TreeLoadError(f"'children' of node '{refid}' must be a list")
    children: List[Node] = [
        _node_from_dict(child, f"{refid}.children[{index}]")
        for index, child in enumerate(raw_children)
    ]
    properties: Dict[str, Any] = {
        key: value for key, value in data.items() if key not in _KNOWN_KEYS
    }

    return Node(
        refid=refid,
        kind=kind,
        name=str(data.get("name") or refid),
        title=str(data.get("title") or ""),
        qualified_name=str(data.get("qualifiedName") or ""),
        url=str(data.get("url") or ""),
        category=category,
        children=children,
        properties=properties,
    )


__all__ = ["TreeLoadError", "load_tree", "tree_from_payload"]
