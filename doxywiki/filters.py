"""Kind filters and per-node inclusion rules."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath
from typing import FrozenSet, Sequence

from .models import FolderCategory, Kind, Node

Filter = FrozenSet[Kind]

NO_SKIP: Filter = frozenset()

LANGUAGE_FILTER: Filter = frozenset(
    {
        Kind.NAMESPACE,
        Kind.CLASS,
        Kind.INTERFACE,
        Kind.STRUCT,
        Kind.UNION,
        Kind.JAVAENUM,
        Kind.MODULE,
        Kind.DIR,
        Kind.FILE,
        Kind.PAGE,
        Kind.EXAMPLE,
    }
)

INDEX_CLASS_FILTER: Filter = frozenset(
    {Kind.NAMESPACE, Kind.CLASS, Kind.INTERFACE, Kind.STRUCT, Kind.UNION, Kind.JAVAENUM}
)
INDEX_NAMESPACES_FILTER: Filter = frozenset({Kind.NAMESPACE})
INDEX_MODULES_FILTER: Filter = frozenset({Kind.MODULE})
INDEX_FILES_FILTER: Filter = frozenset({Kind.DIR, Kind.FILE})
INDEX_PAGES_FILTER: Filter = frozenset({Kind.PAGE})
INDEX_EXAMPLES_FILTER: Filter = frozenset({Kind.EXAMPLE})


@dataclass(frozen=True)
class SummarySection:
    """One top-level entry of the navigation summary."""

    category: FolderCategory
    filter: Filter
    skip: Filter = NO_SKIP


DEFAULT_INDEXES: tuple[SummarySection, ...] = (
    SummarySection(FolderCategory.CLASSES, INDEX_CLASS_FILTER),
    SummarySection(FolderCategory.NAMESPACES, INDEX_NAMESPACES_FILTER),
    SummarySection(FolderCategory.MODULES, INDEX_MODULES_FILTER),
    SummarySection(FolderCategory.FILES, INDEX_FILES_FILTER),
    SummarySection(FolderCategory.PAGES, INDEX_PAGES_FILTER),
    SummarySection(FolderCategory.EXAMPLES, INDEX_EXAMPLES_FILTER),
)

# Namespaces get their own section, so the classes outline only walks through them.
DEFAULT_SUMMARY_SECTIONS: tuple[SummarySection, ...] = (
    SummarySection(FolderCategory.CLASSES, INDEX_CLASS_FILTER, frozenset({Kind.NAMESPACE})),
) + DEFAULT_INDEXES[1:]


def make_filter(*kinds: Kind) -> Filter:
    return frozenset(kinds)


def should_include(node: Node, files_filter: Sequence[str]) -> bool:
    """Return True when ``node`` passes the configured file-extension allow-list."""
    if node.kind is not Kind.FILE:
        return True
    if not files_filter:
        return True
    return PurePath(node.name).suffix in files_filter


def is_eligible(node: Node, filter: Filter, skip: Filter, files_filter: Sequence[str]) -> bool:
    """Return True when ``node`` should produce its own output for this pass."""
    return node.kind in filter and node.kind not in skip and should_include(node, files_filter)


def is_main_page(node: Node, main_page_name: str) -> bool:
    return node.kind is Kind.PAGE and node.refid == main_page_name


__all__ = [
    "DEFAULT_INDEXES",
    "DEFAULT_SUMMARY_SECTIONS",
    "Filter",
    "INDEX_CLASS_FILTER",
    "INDEX_EXAMPLES_FILTER",
    "INDEX_FILES_FILTER",
    "INDEX_MODULES_FILTER",
    "INDEX_NAMESPACES_FILTER",
    "INDEX_PAGES_FILTER",
    "LANGUAGE_FILTER",
    "NO_SKIP",
    "SummarySection",
    "is_eligible",
    "is_main_page",
    "make_filter",
    "should_include",
]
