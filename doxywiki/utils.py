"""Text normalisation helpers for anchors, packages and file names."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List

_ANCHOR_SUFFIX = re.compile(r"_[a-z0-9]{34,67}$")

_LANGUAGE_ALIASES: Dict[str, str] = {
    "h": "cpp",
    "c++": "cpp",
    "cs": "csharp",
    "c#": "csharp",
}

_ESCAPES: Dict[str, str] = {
    "<": "&lt;",
    ">": "&gt;",
    "*": "&#42;",
    "_": "&#95;",
}

# Characters the target wiki accepts only in percent-encoded form.
_WIKI_ENCODED: Dict[str, str] = {
    ":": "%3A",
    "<": "%3C",
    ">": "%3E",
    "*": "%2A",
    "?": "%3F",
    "|": "%7C",
    '"': "%22",
}
_WIKI_KEEP = frozenset("_.+-")
_WIKI_MAX_LENGTH = 200

_OPENERS = frozenset("([<")
_CLOSERS = frozenset(")]>")


def to_lower(text: str) -> str:
    return text.lower()


def title(text: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    if not text:
        return text
    return text[0].upper() + text[1:]


def safe_anchor_id(text: str, replace_underscores: bool = False) -> str:
    """Return an in-page anchor id for ``text``."""
    anchor = text.lower().replace("::", "").replace(" ", "-")
    if replace_underscores:
        anchor = anchor.replace("_", "-")
    return anchor


def namespace_to_package(text: str) -> str:
    return text.replace("::", ".")


def replace_newline(text: str) -> str:
    return text.replace("\n", " ")


def normalize_language(language: str) -> str:
    lowered = language.lower()
    return _LANGUAGE_ALIASES.get(lowered, lowered)


def strip_namespace(text: str) -> str:
    """Return the part of ``text`` after its last top-level scope separator.

    Separators (``.`` and ``:``) nested inside ``()``, ``[]`` or ``<>`` are
    ignored, so template arguments such as ``Foo<std::string>`` stay intact.
    """
    depth = 0
    offset = -1
    for index, char in enumerate(text):
        if char in _OPENERS:
            depth += 1
        elif char in _CLOSERS:
            depth -= 1
        elif char in ".:" and depth == 0:
            offset = index + 1
    if offset < 0:
        return text
    return text[offset:]


def strip_anchor(text: str) -> str:
    """Drop a trailing Doxygen hash suffix such as ``_1a2b...``."""
    return _ANCHOR_SUFFIX.sub("", text)


def escape(text: str) -> str:
    """Escape the characters Markdown would otherwise interpret."""
    expanded = sum(len(_ESCAPES.get(char, char)) for char in text)
    if expanded == len(text):
        return text
    parts: List[str] = []
    for char in text:
        parts.append(_ESCAPES.get(char, char))
    return "".join(parts)


def _is_wiki_alnum(char: str) -> bool:
    return char.isascii() and char.isalnum()


def wiki_safe_file_name(text: str) -> str:
    """Return a file name accepted by the wiki's page naming rules.

    Spaces become hyphens, a fixed set of reserved characters is
    percent-encoded and anything else outside ``[A-Za-z0-9_.+-]`` is dropped.
    The result never starts or ends with a period and is at most 200
    characters long; it may be empty.
    """
    parts: List[str] = []
    for char in text.replace(" ", "-"):
        if _is_wiki_alnum(char) or char in _WIKI_KEEP:
            parts.append(char)
        elif char in _WIKI_ENCODED:
            parts.append(_WIKI_ENCODED[char])
    result = "".join(parts).strip(".")
    # Truncation can expose a new trailing period.
    return result[:_WIKI_MAX_LENGTH].rstrip(".")


def split(text: str, delim: str) -> List[str]:
    """Split ``text`` on ``delim`` dropping a trailing empty token."""
    tokens = text.split(delim)
    if tokens and not tokens[-1]:
        tokens.pop()
    return tokens


def date(fmt: str) -> str:
    return datetime.now().strftime(fmt)


def create_directory(path: Path | str) -> None:
    """Create ``path`` if it does not exist yet."""
    Path(path).mkdir(parents=True, exist_ok=True)


__all__ = [
    "create_directory",
    "date",
    "escape",
    "namespace_to_package",
    "normalize_language",
    "replace_newline",
    "safe_anchor_id",
    "split",
    "strip_anchor",
    "strip_namespace",
    "title",
    "to_lower",
    "wiki_safe_file_name",
]
