"""Human-readable, collision-free page names for wiki output."""

from __future__ import annotations

import hashlib
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .logging import get_logger
from .models import DocTree, FolderCategory, Node
from .utils import wiki_safe_file_name


class WikiNameResolver:
    """Assigns each node a sanitized file name that is unique within its folder.

    Names are memoized per refid for the lifetime of the resolver, so the
    order in which nodes are first resolved decides which one keeps the bare
    name and which ones receive ``-1``, ``-2`` ... suffixes. Use
    :meth:`build_mapping` to fix that order to the tree's pre-order before any
    output is produced.

    Two nodes collide only when they would share an output folder: with
    ``use_folders`` enabled that means the same category, otherwise every
    page lands in one flat directory and all names share a single scope.
    """

    def __init__(self, tree: DocTree, *, use_folders: bool = True) -> None:
        self._tree = tree
        self._use_folders = use_folders
        self._names: Dict[str, str] = {}
        self._refids_by_name: Dict[str, List[str]] = {}
        self.logger = get_logger("naming")

    @property
    def mapping(self) -> Mapping[str, str]:
        """Read-only view of ``refid -> wiki name``."""
        return MappingProxyType(self._names)

    def resolve(self, node: Node) -> str:
        existing = self._names.get(node.refid)
        if existing is not None:
            return existing

        if node.is_file_or_dir():
            source = node.qualified_name
        else:
            source = node.title or node.name

        candidate = wiki_safe_file_name(source)
        if not candidate:
            candidate = wiki_safe_file_name(node.refid)
            self.logger.debug("Empty wiki name for '%s', using refid '%s'", source, candidate)
        if not candidate:
            candidate = _hashed_name(node.refid)
            self.logger.debug("Refid '%s' has no safe characters, using '%s'", node.refid, candidate)

        name = candidate
        suffix = 1
        while self._collides(name, node):
            name = f"{candidate}-{suffix}"
            suffix += 1

        self._names[node.refid] = name
        self._refids_by_name.setdefault(name, []).append(node.refid)
        self.logger.debug("Added mapping: '%s' -> '%s'", node.refid, name)
        return name

    def build_mapping(self, root: Optional[Node] = None) -> Mapping[str, str]:
        """Resolve every node below ``root`` in pre-order, ignoring all filters."""
        start = root if root is not None else self._tree.index
        stack = list(reversed(start.children))
        while stack:
            node = stack.pop()
            self.resolve(node)
            stack.extend(reversed(node.children))
        self.logger.info("Wiki name mapping built with %d entries.", len(self._names))
        return self.mapping

    def name_for_refid(self, refid: str) -> str:
        """Return the resolved name for ``refid``, or the refid itself when unknown."""
        return self._names.get(refid, refid)

    def _collides(self, name: str, node: Node) -> bool:
        for other_refid in self._refids_by_name.get(name, ()):
            other = self._tree.find(other_refid)
            if other is None:
                continue
            if self._scope(other) == self._scope(node):
                self.logger.debug("Duplicate name '%s' found in same folder", name)
                return True
        return False

    def _scope(self, node: Node) -> Optional[FolderCategory]:
        return node.category if self._use_folders else None

    def __contains__(self, refid: object) -> bool:
        return refid in self._names

    def __len__(self) -> int:
        return len(self._names)


def _hashed_name(refid: str) -> str:
    digest = hashlib.sha256(refid.encode("utf-8")).hexdigest()
    return f"node-{digest[:16]}"


__all__ = ["WikiNameResolver"]
