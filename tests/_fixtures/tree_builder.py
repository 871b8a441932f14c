"""Helper utilities for constructing documentation trees in tests."""

from __future__ import annotations

from typing import Iterable, Optional

from doxywiki.models import DocTree, FolderCategory, Kind, Node


def node(
    refid: str,
    kind: Kind,
    name: str,
    *children: Node,
    title: str = "",
    qualified_name: str = "",
    category: Optional[FolderCategory] = None,
    **properties: object,
) -> Node:
    """Build a node with sensible defaults for tests."""
    return Node(
        refid=refid,
        kind=kind,
        name=name,
        title=title,
        qualified_name=qualified_name,
        url=f"{refid}.md",
        category=category,
        children=list(children),
        properties=dict(properties),
    )


def tree(*children: Node) -> DocTree:
    """Wrap ``children`` in a synthetic root."""
    return DocTree.from_children(list(children))


def sample_tree() -> DocTree:
    """A small C++-like project with namespaces, classes, files and pages."""
    return tree(
        node(
            "namespace_engine",
            Kind.NAMESPACE,
            "Engine",
            node(
                "namespace_engine_1_1_graphics",
                Kind.NAMESPACE,
                "Engine::Graphics",
                node("class_texture", Kind.CLASS, "Engine::Graphics::Texture", brief="Base texture"),
                node("class_texture3_d", Kind.CLASS, "Engine::Graphics::Texture3D"),
            ),
            node("struct_config", Kind.STRUCT, "Engine::Config"),
        ),
        node(
            "dir_src",
            Kind.DIR,
            "src",
            node(
                "texture_8hpp",
                Kind.FILE,
                "Texture.hpp",
                qualified_name="src/Texture.hpp",
            ),
            node("texture_8cpp", Kind.FILE, "Texture.cpp", qualified_name="src/Texture.cpp"),
            qualified_name="src",
        ),
        node("group__graphics", Kind.MODULE, "graphics", title="Graphics Module"),
        node("indexpage", Kind.PAGE, "index", title="Main Page"),
        node("md_guide", Kind.PAGE, "guide", title="User Guide"),
    )


def refids(nodes: Iterable[Node]) -> list[str]:
    return [item.refid for item in nodes]


__all__ = ["node", "refids", "sample_tree", "tree"]
