"""Tests for the jinja2 page renderer."""

from __future__ import annotations

from pathlib import Path

import pytest

from doxywiki.config import DoxywikiConfig
from doxywiki.renderer import RenderError, Renderer


def test_render_writes_packaged_template(config: DoxywikiConfig) -> None:
    renderer = Renderer(config)
    data = {
        "title": "Engine::Texture<T>",
        "brief": "Base texture",
        "children": [{"kind": "function", "name": "Engine::Texture::get_width", "url": "#get-width"}],
    }

    written = renderer.render("kind_class", "Texture.md", data)

    assert written == config.output_dir / "Texture.md"
    content = written.read_text(encoding="utf-8")
    assert content.startswith("# Engine::Texture&lt;T&gt;\n")
    assert "Base texture" in content
    assert "* **function** [get&#95;width](#get-width)" in content


def test_user_templates_override_packaged_ones(config: DoxywikiConfig, tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "kind_page.j2").write_text(
        "{{ title | wiki_safe_file_name }} ({{ config.file_ext }})\n", encoding="utf-8"
    )
    config.templates_dir = templates

    written = Renderer(config).render("kind_page", "page.md", {"title": "User Guide"})

    assert written.read_text(encoding="utf-8") == "User-Guide (md)\n"


def test_index_template_renders_nested_children(config: DoxywikiConfig) -> None:
    data = {
        "title": "Classes",
        "name": "Classes",
        "children": [
            {
                "kind": "namespace",
                "name": "Engine",
                "url": "Namespaces/Engine.md",
                "children": [{"kind": "class", "name": "Texture", "url": "Classes/Texture.md"}],
            }
        ],
    }

    content = Renderer(config).render_string("index_classes", data)

    assert content.startswith("# Classes\n")
    assert "* **namespace** [Engine](Namespaces/Engine.md)" in content
    assert "  * **class** [Texture](Classes/Texture.md)" in content


def test_missing_template_raises(config: DoxywikiConfig) -> None:
    with pytest.raises(RenderError, match="kind_missing"):
        Renderer(config).render("kind_missing", "x.md", {})


def test_unwritable_destination_raises_with_path(config: DoxywikiConfig) -> None:
    renderer = Renderer(config)
    with pytest.raises(RenderError, match="no-such-folder"):
        renderer.render("kind_page", "no-such-folder/page.md", {"title": "Page"})


def test_undefined_variables_fail_loudly(config: DoxywikiConfig) -> None:
    with pytest.raises(RenderError, match="failed to render"):
        Renderer(config).render_string("kind_page", {})


def test_templates_can_use_split_lower_and_date(config: DoxywikiConfig, tmp_path: Path) -> None:
    templates = tmp_path / "templates"
    templates.mkdir()
    (templates / "kind_page.j2").write_text(
        "{% for part in title | split('::') %}{{ part | to_lower }};{% endfor %}"
        " {{ date('%Y') | length }}\n",
        encoding="utf-8",
    )
    config.templates_dir = templates

    content = Renderer(config).render_string("kind_page", {"title": "Engine::Texture::"})

    assert content == "engine;texture; 4\n"
