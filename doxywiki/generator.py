"""Tree traversal, naming and output dispatch for a generation run."""

from __future__ import annotations

import json
from pathlib import Path, PurePosixPath
from typing import Any, Dict, List, Optional, Sequence

from .config import DoxywikiConfig
from .filters import Filter, SummarySection, is_eligible, is_main_page, should_include
from .json_converter import DataConverter
from .logging import get_logger
from .models import DocTree, FolderCategory, Kind, Node
from .naming import WikiNameResolver
from .renderer import Renderer

SUMMARY_PLACEHOLDER = "{{doxygen}}"
MANIFEST_FILENAME = "manifest.json"


class GeneratorError(RuntimeError):
    """Raised when generated output cannot be read or written."""


class UnknownKindError(GeneratorError):
    """Raised when a node kind has no page template."""


class Generator:
    """Walks the documentation tree and dispatches every eligible node.

    All passes share one traversal rule: a node's kind gates only its own
    output, never whether its descendants are visited.
    """

    def __init__(
        self,
        config: DoxywikiConfig,
        tree: DocTree,
        converter: DataConverter,
        renderer: Renderer,
        resolver: Optional[WikiNameResolver] = None,
    ) -> None:
        self.config = config
        self.tree = tree
        self.converter = converter
        self.renderer = renderer
        self.logger = get_logger("generator")
        self.resolver = resolver
        if self.config.use_wiki_naming and self.resolver is None:
            self.resolver = WikiNameResolver(tree, use_folders=config.use_folders)
        if self.resolver is not None and self.config.use_wiki_naming:
            self.logger.info("Wiki naming conventions enabled. Building mapping...")
            self.resolver.build_mapping(tree.index)

    # ------------------------------------------------------------------
    # Public passes

    def print(self, filter: Filter, skip: Filter) -> None:
        """Render every eligible node into its kind's page template."""
        self._print_recursively(self.tree.index, filter, skip)

    def json(self, filter: Filter, skip: Filter) -> None:
        """Write every eligible node's data record as ``<filename>.json``."""
        self._json_recursively(self.tree.index, filter, skip)

    def manifest(self) -> Path:
        """Write ``manifest.json`` describing the whole included tree."""
        data = self.build_manifest(self.tree.index)
        path = self.config.output_dir / MANIFEST_FILENAME
        self._write_json(path, data)
        return path

    def print_index(self, category: FolderCategory, filter: Filter, skip: Filter) -> Path:
        """Render the alphabetical index page for ``category``."""
        path = f"{self.config.index_name(category)}.{self.config.file_ext}"
        data = {
            "children": self.build_index(self.tree.index, filter, skip),
            "title": self.config.index_title(category),
            "name": self.config.index_title(category),
        }
        return self.renderer.render(self.config.index_template(category), path, data)

    def summary(
        self,
        input_file: Path,
        output_file: Path,
        sections: Sequence[SummarySection],
    ) -> None:
        """Copy ``input_file`` to ``output_file`` with the navigation outline spliced in."""
        try:
            template = Path(input_file).read_text(encoding="utf-8")
        except OSError as exc:
            raise GeneratorError(f"File {input_file} failed to open for reading") from exc

        content = self.render_summary(template, sections)
        self.logger.info("Rendering %s", output_file)
        try:
            Path(output_file).write_text(content, encoding="utf-8")
        except OSError as exc:
            raise GeneratorError(f"File {output_file} failed to open for writing") from exc

    def render_summary(self, template: str, sections: Sequence[SummarySection]) -> str:
        offset = template.find(SUMMARY_PLACEHOLDER)
        if offset < 0:
            offset = len(template)
        before = template[:offset]
        after = template[offset + len(SUMMARY_PLACEHOLDER):]
        indent = len(before) - len(before.rstrip(" "))

        lines: List[str] = []
        for section in sections:
            title = self.config.index_title(section.category)
            index_path = f"{self.config.index_name(section.category)}.{self.config.file_ext}"
            lines.append(f"{' ' * indent}* [{title}]({index_path})")
            self._summary_recursively(lines, indent, self.tree.index, section.filter, section.skip)

        block = "\n".join(lines)
        return before + block[indent:] + after

    # ------------------------------------------------------------------
    # Naming and paths

    def filename_for(self, node: Node) -> str:
        if self.config.use_wiki_naming and self.resolver is not None:
            return self.resolver.resolve(node)
        return node.refid

    def output_path(self, node: Node, filename: str) -> str:
        page = f"{filename}.{self.config.file_ext}"
        if self._is_main_page(node):
            return page
        if self.config.use_folders and node.category is not None:
            return str(PurePosixPath(self.config.folder_name(node.category), page))
        return page

    def kind_to_template_name(self, kind: Kind) -> str:
        template = self.config.template_for_kind(kind)
        if template is None:
            raise UnknownKindError(f"Unrecognised kind {kind.value}, no page template is defined")
        return template

    def should_include(self, node: Node) -> bool:
        return should_include(node, self.config.files_filter)

    # ------------------------------------------------------------------
    # Recursive builders

    def build_manifest(self, node: Node) -> List[Dict[str, Any]]:
        entries: List[Dict[str, Any]] = []
        for child in node.children:
            if not self.should_include(child):
                continue
            data: Dict[str, Any] = {"kind": child.kind.value, "name": child.name}
            if child.kind is Kind.MODULE:
                data["title"] = child.title
            data["url"] = child.url
            nested = self.build_manifest(child)
            if nested:
                data["children"] = nested
            entries.append(data)
        return entries

    def build_index(self, node: Node, filter: Filter, skip: Filter) -> List[Dict[str, Any]]:
        entries: List[Dict[str, Any]] = []
        for child in self._index_candidates(node, filter, skip):
            data = self.converter.convert(child)
            nested = self.build_index(child, filter, skip)
            if nested:
                data["children"] = nested
            entries.append(data)
        return entries

    def _index_candidates(self, node: Node, filter: Filter, skip: Filter) -> List[Node]:
        candidates: List[Node] = []
        for child in node.children:
            if child.kind not in filter or not self.should_include(child):
                continue
            if child.kind in skip:
                # Skipped containers are transparent: their entries move up a level.
                candidates.extend(self._index_candidates(child, filter, skip))
            else:
                candidates.append(child)
        return sorted(candidates, key=lambda item: item.name)

    def _print_recursively(self, parent: Node, filter: Filter, skip: Filter) -> None:
        for child in parent.children:
            if self._is_eligible(child, filter, skip):
                data = self.converter.get_as_json(child)
                path = self.output_path(child, self.filename_for(child))
                self.renderer.render(self.kind_to_template_name(child.kind), path, data)
            self._print_recursively(child, filter, skip)

    def _json_recursively(self, parent: Node, filter: Filter, skip: Filter) -> None:
        for child in parent.children:
            if self._is_eligible(child, filter, skip):
                data = self.converter.get_as_json(child)
                path = self.config.output_dir / f"{self.filename_for(child)}.json"
                self._write_json(path, data)
            self._json_recursively(child, filter, skip)

    def _summary_recursively(
        self,
        lines: List[str],
        indent: int,
        node: Node,
        filter: Filter,
        skip: Filter,
    ) -> None:
        for child in node.children:
            if self._is_main_page(child):
                continue
            child_indent = indent
            if self._is_eligible(child, filter, skip):
                link = self._summary_link(child)
                lines.append(f"{' ' * indent}* [{child.name}]({link})")
                child_indent = indent + 2
            self._summary_recursively(lines, child_indent, child, filter, skip)

    def _summary_link(self, node: Node) -> str:
        page = f"{self.filename_for(node)}.{self.config.file_ext}"
        if self.config.use_folders and node.category is not None:
            return f"{self.config.folder_name(node.category)}/{page}"
        return page

    # ------------------------------------------------------------------
    # Helpers

    def _is_eligible(self, node: Node, filter: Filter, skip: Filter) -> bool:
        return is_eligible(node, filter, skip, self.config.files_filter)

    def _is_main_page(self, node: Node) -> bool:
        return is_main_page(node, self.config.main_page_name)

    def _write_json(self, path: Path, data: Any) -> None:
        self.logger.info("Rendering %s", path)
        try:
            with path.open("w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
        except OSError as exc:
            raise GeneratorError(f"File {path} failed to open for writing") from exc


__all__ = [
    "Generator",
    "GeneratorError",
    "MANIFEST_FILENAME",
    "SUMMARY_PLACEHOLDER",
    "UnknownKindError",
]
