"""Tests for doxywiki.utils."""

from __future__ import annotations

from pathlib import Path

import pytest

from doxywiki import utils


def test_title_and_lower() -> None:
    assert utils.title("hello world") == "Hello world"
    assert utils.title("") == ""
    assert utils.to_lower("MiXeD") == "mixed"


def test_safe_anchor_id_strips_scope_and_spaces() -> None:
    assert utils.safe_anchor_id("Engine::Graphics Texture") == "enginegraphics-texture"
    assert utils.safe_anchor_id("get_width") == "get_width"
    assert utils.safe_anchor_id("get_width", replace_underscores=True) == "get-width"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("A::B<C::D>::E", "E"),
        ("simple", "simple"),
        ("java.util.List", "List"),
        ("fn(std::string)", "fn(std::string)"),
        ("Foo<Bar::Baz>", "Foo<Bar::Baz>"),
        ("ns::call(a.b)[x.y]", "call(a.b)[x.y]"),
    ],
)
def test_strip_namespace_ignores_nested_separators(value: str, expected: str) -> None:
    assert utils.strip_namespace(value) == expected


def test_strip_anchor_removes_doxygen_hash() -> None:
    anchor = "class_texture_1a" + "0123456789abcdef0123456789abcdef01"
    assert utils.strip_anchor(anchor) == "class_texture"
    assert utils.strip_anchor("class_texture_short") == "class_texture_short"


def test_escape_markdown_characters() -> None:
    assert utils.escape("a<b>c*d_e") == "a&lt;b&gt;c&#42;d&#95;e"
    assert utils.escape("plain") == "plain"
    assert utils.escape("") == ""


def test_wiki_safe_file_name_encodes_and_drops() -> None:
    assert utils.wiki_safe_file_name("My Page") == "My-Page"
    assert utils.wiki_safe_file_name("Engine::Texture<T>") == "Engine%3A%3ATexture%3CT%3E"
    assert utils.wiki_safe_file_name('a*b?c|d"e') == "a%2Ab%3Fc%7Cd%22e"
    assert utils.wiki_safe_file_name("src/dir\\file#1.hpp") == "srcdirfile1.hpp"
    assert utils.wiki_safe_file_name("c++_x.y") == "c++_x.y"


@pytest.mark.parametrize(
    "value",
    ["", "/#\\", ".", "...", ".hidden.", "x" * 450, "a." + "b" * 198 + ".c", "ünïcödé name"],
)
def test_wiki_safe_file_name_is_total(value: str) -> None:
    result = utils.wiki_safe_file_name(value)
    assert len(result) <= 200
    assert not result.startswith(".")
    assert not result.endswith(".")
    allowed = set("abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_.+-%")
    assert set(result) <= allowed


def test_wiki_safe_file_name_strips_single_edge_periods() -> None:
    assert utils.wiki_safe_file_name(".config.") == "config"
    assert utils.wiki_safe_file_name("Report.md") == "Report.md"


def test_language_and_package_helpers() -> None:
    assert utils.normalize_language("C++") == "cpp"
    assert utils.normalize_language("C#") == "csharp"
    assert utils.normalize_language("Python") == "python"
    assert utils.namespace_to_package("Engine::Graphics") == "Engine.Graphics"
    assert utils.replace_newline("a\nb") == "a b"


def test_split_drops_trailing_empty_token() -> None:
    assert utils.split("a,b,", ",") == ["a", "b"]
    assert utils.split("a::b::c", "::") == ["a", "b", "c"]


def test_create_directory_is_idempotent(tmp_path: Path) -> None:
    target = tmp_path / "Classes"
    utils.create_directory(target)
    utils.create_directory(target)
    assert target.is_dir()
