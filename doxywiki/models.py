"""Core data models for the documentation tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional


class Kind(Enum):
    """Doxygen kinds known to doxywiki."""

    CLASS = "class"
    STRUCT = "struct"
    UNION = "union"
    INTERFACE = "interface"
    NAMESPACE = "namespace"
    MODULE = "group"
    DIR = "dir"
    FILE = "file"
    PAGE = "page"
    EXAMPLE = "example"
    JAVAENUM = "javaenum"
    # Member kinds live inside compound pages and never get a file of their own.
    FUNCTION = "function"
    VARIABLE = "variable"
    TYPEDEF = "typedef"
    ENUM = "enum"
    ENUMVALUE = "enumvalue"
    DEFINE = "define"
    FRIEND = "friend"

    @classmethod
    def parse(cls, value: str) -> "Kind":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown node kind '{value}'") from None


class FolderCategory(Enum):
    """Coarse grouping that decides output folders and naming scope."""

    CLASSES = "classes"
    NAMESPACES = "namespaces"
    MODULES = "modules"
    FILES = "files"
    PAGES = "pages"
    EXAMPLES = "examples"

    @classmethod
    def parse(cls, value: str) -> "FolderCategory":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ValueError(f"Unknown folder category '{value}'") from None


_CATEGORY_BY_KIND: Dict[Kind, FolderCategory] = {
    Kind.CLASS: FolderCategory.CLASSES,
    Kind.STRUCT: FolderCategory.CLASSES,
    Kind.UNION: FolderCategory.CLASSES,
    Kind.INTERFACE: FolderCategory.CLASSES,
    Kind.JAVAENUM: FolderCategory.CLASSES,
    Kind.NAMESPACE: FolderCategory.NAMESPACES,
    Kind.MODULE: FolderCategory.MODULES,
    Kind.DIR: FolderCategory.FILES,
    Kind.FILE: FolderCategory.FILES,
    Kind.PAGE: FolderCategory.PAGES,
    Kind.EXAMPLE: FolderCategory.EXAMPLES,
}


def category_for_kind(kind: Kind) -> Optional[FolderCategory]:
    """Return the folder category for compound kinds, ``None`` for members."""
    return _CATEGORY_BY_KIND.get(kind)


@dataclass
class Node:
    """Single element of the documentation tree."""

    refid: str
    kind: Kind
    name: str
    title: str = ""
    qualified_name: str = ""
    url: str = ""
    category: Optional[FolderCategory] = None
    children: List["Node"] = field(default_factory=list)
    properties: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.category is None:
            self.category = category_for_kind(self.kind)

    def is_file_or_dir(self) -> bool:
        return self.kind in (Kind.FILE, Kind.DIR)


class DocTree:
    """Read-only documentation tree with refid lookup."""

    ROOT_REFID = "index"

    def __init__(self, index: Node) -> None:
        self.index = index
        self._by_refid: Dict[str, Node] = {}
        for node in self.walk():
            if node.refid in self._by_refid:
                raise ValueError(f"Duplicate refid '{node.refid}' in documentation tree")
            self._by_refid[node.refid] = node

    @classmethod
    def from_children(cls, children: List[Node]) -> "DocTree":
        """Wrap top-level nodes in a synthetic root node."""
        root = Node(refid=cls.ROOT_REFID, kind=Kind.PAGE, name="index", children=list(children))
        return cls(root)

    def find(self, refid: str) -> Optional[Node]:
        return self._by_refid.get(refid)

    def walk(self) -> Iterator[Node]:
        """Yield every node below the root in strict pre-order."""
        stack = list(reversed(self.index.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def __len__(self) -> int:
        return len(self._by_refid)

    def __contains__(self, refid: object) -> bool:
        return refid in self._by_refid


__all__ = ["DocTree", "FolderCategory", "Kind", "Node", "category_for_kind"]
