from __future__ import annotations

from pathlib import Path

import pytest

from doxywiki.config import DoxywikiConfig
from doxywiki.models import DocTree
from tests._fixtures.tree_builder import sample_tree


@pytest.fixture
def doc_tree() -> DocTree:
    """Provide a fresh sample documentation tree."""
    return sample_tree()


@pytest.fixture
def config(tmp_path: Path) -> DoxywikiConfig:
    """Default config writing into a temporary output directory."""
    output = tmp_path / "out"
    output.mkdir()
    return DoxywikiConfig(output_dir=output)
