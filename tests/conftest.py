"""Shared test fixtures."""

from pathlib import Path

import pytest

from staticdocs.config import Config
from staticdocs.site import DocsSite


@pytest.fixture
def docs_root(tmp_path: Path) -> Path:
    """Create an empty docs root."""
    docs = tmp_path / "public" / "docs"
    docs.mkdir(parents=True)
    return docs


@pytest.fixture
def test_config(tmp_path: Path, docs_root: Path) -> Config:
    """Create a test configuration with tmp_path directories."""
    return Config(
        docs_root=docs_root,
        template_root=tmp_path / "public",
        output_dir=tmp_path / "dist",
    )


@pytest.fixture
def site(test_config: Config) -> DocsSite:
    return DocsSite(test_config)


def write_docs(docs_root: Path, files: dict[str, str]) -> None:
    """Write markdown files given as {relative path: content}."""
    for relative, content in files.items():
        path = docs_root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
