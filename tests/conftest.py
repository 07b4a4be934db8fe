"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest
from mdsite.config import BuildSettings, Config, SiteConfig

WriteTree = Callable[[dict[str, str]], Path]


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Empty source root."""
    root = tmp_path / "site"
    root.mkdir()
    return root


@pytest.fixture
def write_tree(source_dir: Path) -> WriteTree:
    """Write files (relative path -> content) under the source root."""

    def _write(files: dict[str, str]) -> Path:
        for relative, content in files.items():
            path = source_dir / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return source_dir

    return _write


@pytest.fixture
def test_config(source_dir: Path) -> Config:
    """Create a test configuration rooted at source_dir.

    Output and static directories live inside the source root, as in a
    typical personal site checkout.
    """
    return Config(
        site=SiteConfig(title="Test Site", description="A test"),
        build=BuildSettings(
            source_dir=source_dir,
            output_dir=source_dir / "build",
            static_dir=source_dir / "static",
        ),
        decoration=None,
    )
