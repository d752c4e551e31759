"""Markdown document discovery.

Enumerates Markdown files below the docs root. Every call to
``DocumentFileProvider.iter_files()`` starts an independent traversal, so the
route table and the navigation tree can both walk the same files.
"""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from staticdocs.errors import RootNotFoundError

logger = logging.getLogger(__name__)

MARKDOWN_SUFFIX = ".md"


@dataclass(frozen=True)
class DocumentFile:
    """Markdown document found under the docs root."""

    path: Path
    relative_dir: tuple[str, ...]
    name: str

    @property
    def relative_dir_path(self) -> str:
        """Relative directory joined with "/" ("" for the root)."""
        return "/".join(self.relative_dir)

    @property
    def is_index(self) -> bool:
        return self.name == "index"


class DocumentFileProvider:
    """Lists Markdown documents below a root directory."""

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        """Docs root directory."""
        return self._root

    def exists(self) -> bool:
        return self._root.is_dir()

    def iter_files(self) -> Iterator[DocumentFile]:
        """Start a fresh traversal of the docs root.

        The root is checked eagerly; the walk itself is lazy and follows the
        filesystem order.

        Returns:
            Iterator of DocumentFile records

        Raises:
            RootNotFoundError: If the root does not exist
        """
        if not self.exists():
            raise RootNotFoundError(self._root)
        return self._walk()

    def _walk(self) -> Iterator[DocumentFile]:
        root = self._root.resolve()
        for dirpath, _dirnames, filenames in os.walk(root):
            current = Path(dirpath)
            relative = current.relative_to(root)
            relative_dir = relative.parts
            for filename in filenames:
                if not filename.endswith(MARKDOWN_SUFFIX):
                    continue
                name = filename[: -len(MARKDOWN_SUFFIX)]
                logger.debug(f"Found document {relative / filename}")
                yield DocumentFile(
                    path=current / filename,
                    relative_dir=relative_dir,
                    name=name,
                )
