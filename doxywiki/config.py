"""Configuration loading for doxywiki (.doxywiki.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .models import FolderCategory, Kind

CONFIG_FILENAME = ".doxywiki.yml"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


_DEFAULT_KIND_TEMPLATES: Dict[Kind, str] = {
    Kind.CLASS: "kind_class",
    Kind.STRUCT: "kind_class",
    Kind.UNION: "kind_class",
    Kind.INTERFACE: "kind_class",
    Kind.JAVAENUM: "kind_class",
    Kind.NAMESPACE: "kind_nonclass",
    Kind.MODULE: "kind_nonclass",
    Kind.DIR: "kind_file",
    Kind.FILE: "kind_file",
    Kind.PAGE: "kind_page",
    Kind.EXAMPLE: "kind_page",
}

_DEFAULT_INDEX_TEMPLATES: Dict[FolderCategory, str] = {
    FolderCategory.CLASSES: "index_classes",
    FolderCategory.NAMESPACES: "index_namespaces",
    FolderCategory.MODULES: "index_groups",
    FolderCategory.FILES: "index_files",
    FolderCategory.PAGES: "index_pages",
    FolderCategory.EXAMPLES: "index_examples",
}

_DEFAULT_FOLDERS: Dict[FolderCategory, str] = {
    FolderCategory.CLASSES: "Classes",
    FolderCategory.NAMESPACES: "Namespaces",
    FolderCategory.MODULES: "Modules",
    FolderCategory.FILES: "Files",
    FolderCategory.PAGES: "Pages",
    FolderCategory.EXAMPLES: "Examples",
}

_DEFAULT_INDEX_TITLES: Dict[FolderCategory, str] = {
    FolderCategory.CLASSES: "Classes",
    FolderCategory.NAMESPACES: "Namespaces",
    FolderCategory.MODULES: "Modules",
    FolderCategory.FILES: "Files",
    FolderCategory.PAGES: "Pages",
    FolderCategory.EXAMPLES: "Examples",
}


@dataclass
class TemplateConfig:
    """Template names used for compound pages and category indexes."""

    kinds: Dict[Kind, str] = field(default_factory=lambda: dict(_DEFAULT_KIND_TEMPLATES))
    indexes: Dict[FolderCategory, str] = field(
        default_factory=lambda: dict(_DEFAULT_INDEX_TEMPLATES)
    )


@dataclass
class DoxywikiConfig:
    """Settings consumed by the generator, renderer and converter."""

    output_dir: Path = field(default_factory=lambda: Path("docs"))
    file_ext: str = "md"
    base_url: str = ""
    link_suffix: str = ".md"
    use_folders: bool = True
    use_wiki_naming: bool = False
    main_page_name: str = "indexpage"
    files_filter: List[str] = field(default_factory=list)
    templates_dir: Optional[Path] = None
    templates: TemplateConfig = field(default_factory=TemplateConfig)
    folders: Dict[FolderCategory, str] = field(default_factory=lambda: dict(_DEFAULT_FOLDERS))
    index_names: Dict[FolderCategory, str] = field(
        default_factory=lambda: dict(_DEFAULT_INDEX_TEMPLATES)
    )
    index_titles: Dict[FolderCategory, str] = field(
        default_factory=lambda: dict(_DEFAULT_INDEX_TITLES)
    )

    def folder_name(self, category: FolderCategory) -> str:
        return self.folders[category]

    def index_name(self, category: FolderCategory) -> str:
        return self.index_names[category]

    def index_title(self, category: FolderCategory) -> str:
        return self.index_titles[category]

    def index_template(self, category: FolderCategory) -> str:
        return self.templates.indexes[category]

    def template_for_kind(self, kind: Kind) -> Optional[str]:
        return self.templates.kinds.get(kind)


def load_config(config_path: Path) -> DoxywikiConfig:
    """Load configuration from disk, returning defaults when the file is absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent

    if not config_file.exists():
        return DoxywikiConfig(output_dir=root / "docs")

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return config_from_mapping(data, root=root)


def config_from_mapping(data: Mapping[str, Any], *, root: Path) -> DoxywikiConfig:
    """Build a config from already-parsed data; relative paths resolve against ``root``."""
    config = DoxywikiConfig(output_dir=root / "docs")

    output_dir = _as_str(data.get("output_dir"))
    if output_dir:
        config.output_dir = root / output_dir
    templates_dir = _as_str(data.get("templates_dir"))
    if templates_dir:
        config.templates_dir = root / templates_dir

    file_ext = _as_str(data.get("file_ext"))
    if file_ext:
        config.file_ext = file_ext.lstrip(".")
    base_url = _as_str(data.get("base_url"))
    if base_url is not None:
        config.base_url = base_url
    link_suffix = _as_str(data.get("link_suffix"))
    if link_suffix is not None:
        config.link_suffix = link_suffix
    main_page = _as_str(data.get("main_page_name"))
    if main_page:
        config.main_page_name = main_page

    use_folders = _as_bool(data.get("use_folders"))
    if use_folders is not None:
        config.use_folders = use_folders
    use_wiki = _as_bool(data.get("use_wiki_naming"))
    if use_wiki is not None:
        config.use_wiki_naming = use_wiki

    config.files_filter = _as_str_list(data.get("files_filter"))

    templates = _as_dict(data.get("templates"))
    for key, value in _as_dict(templates.get("kind")).items():
        config.templates.kinds[_parse_kind(key)] = _require_str(value, f"templates.kind.{key}")
    for key, value in _as_dict(templates.get("index")).items():
        config.templates.indexes[_parse_category(key)] = _require_str(
            value, f"templates.index.{key}"
        )

    for section, target in (
        ("folders", config.folders),
        ("index_names", config.index_names),
        ("index_titles", config.index_titles),
    ):
        for key, value in _as_dict(data.get(section)).items():
            target[_parse_category(key)] = _require_str(value, f"{section}.{key}")

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_kind(value: Any) -> Kind:
    try:
        return Kind.parse(str(value))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _parse_category(value: Any) -> FolderCategory:
    try:
        return FolderCategory.parse(str(value))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc


def _require_str(value: Any, key: str) -> str:
    result = _as_str(value)
    if not result:
        raise ConfigError(f"Expected a non-empty string for '{key}'")
    return result


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DoxywikiConfig",
    "TemplateConfig",
    "config_from_mapping",
    "load_config",
]
